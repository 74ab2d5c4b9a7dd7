"""Response schemas for role-specific dashboards."""

from datetime import datetime
from typing import Dict, List, Optional

from ats_analytics.api.schemas.base import CamelModel
from ats_analytics.api.schemas.dashboard_schemas import ConversionRates


# Recruiter

class RecruiterJobs(CamelModel):
    total_jobs: int
    active_jobs: int


class RecruiterPipeline(CamelModel):
    new: int
    screening: int
    interviewing: int
    offered: int
    hired: int
    rejected: int
    total: int


class RecruiterActivity(CamelModel):
    applications_this_month: int
    interviews_this_month: int
    offers_this_month: int


class RecruiterPerformance(CamelModel):
    total_hires: int
    avg_time_to_hire: int


class RecentApplication(CamelModel):
    id: str
    status: Optional[str] = None
    candidate_name: str
    job_title: str
    applied_at: Optional[datetime] = None


class MonthlyTrend(CamelModel):
    month: str
    applications: int
    interviews: int
    hires: int


class SourceBreakdown(CamelModel):
    source: str
    count: int
    hires: int
    conversion_rate: int


class RecruiterJobPerformance(CamelModel):
    job_id: str
    title: str
    status: Optional[str] = None
    applications: int
    interviews: int
    hires: int
    conversion_rate: int
    avg_time_to_hire: int


class SparklineData(CamelModel):
    applications: List[int]
    interviews: List[int]
    hires: List[int]
    pipeline: List[int]


class PreviousMonthActivity(CamelModel):
    applications_last_month: int
    interviews_last_month: int
    hires_last_month: int


class RecruiterStats(CamelModel):
    my_jobs: RecruiterJobs
    my_pipeline: RecruiterPipeline
    my_activity: RecruiterActivity
    my_performance: RecruiterPerformance
    recent_applications: List[RecentApplication]
    monthly_trend: List[MonthlyTrend]
    source_breakdown: List[SourceBreakdown]
    job_performance: List[RecruiterJobPerformance]
    conversion_rates: ConversionRates
    sparkline_data: SparklineData
    previous_month_activity: PreviousMonthActivity


# Interviewer

class RecentInterview(CamelModel):
    id: str
    scheduled_at: Optional[datetime] = None
    status: str
    application_id: Optional[str] = None
    title: str
    has_scorecard: bool


class InterviewerStats(CamelModel):
    upcoming_interviews: int
    completed_interviews: int
    total_interviews: int
    scorecards_submitted: int
    scorecards_pending: int
    scorecard_completion_rate: int
    recent_interviews: List[RecentInterview]


# Candidate list

class CandidateListItem(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    source: str
    status: str
    job_title: str
    department: str
    applied_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None


class CandidateListStats(CamelModel):
    candidates: List[CandidateListItem]
    total_count: int
    status_counts: Dict[str, int]


# Org admin

class TeamOverview(CamelModel):
    total_members: int
    active_members: int


class RoleDistribution(CamelModel):
    role: str
    label: str
    count: int
    percentage: int


class DepartmentMembers(CamelModel):
    id: str
    name: Optional[str] = None
    member_count: int


class DepartmentStats(CamelModel):
    total_departments: int
    departments: List[DepartmentMembers]


class InviteStatus(CamelModel):
    pending: int
    accepted: int
    expired: int


class RecentMember(CamelModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    created_at: Optional[datetime] = None


class OrgAdminStats(CamelModel):
    team_overview: TeamOverview
    role_distribution: List[RoleDistribution]
    department_stats: DepartmentStats
    invite_status: InviteStatus
    recent_members: List[RecentMember]
    distinct_roles_assigned: int
