"""Response schemas for the hiring analytics dashboard."""

from datetime import date
from typing import List

from ats_analytics.api.schemas.base import CamelModel


class Overview(CamelModel):
    total_jobs: int
    active_jobs: int
    total_candidates: int
    total_applications: int
    hired_this_month: int
    hires_in_period: int
    interviews_scheduled: int
    offer_acceptance_rate: int
    avg_time_to_hire: int


class FunnelStage(CamelModel):
    stage: str
    count: int
    percentage: int


class SourceConversion(CamelModel):
    source: str
    count: int
    interviews: int
    hires: int
    conversion_rate: int


class TrendPoint(CamelModel):
    date: str
    applications: int
    hired: int


class DepartmentTimeToHire(CamelModel):
    department: str
    days: int
    hires: int


class JobTimeToHire(CamelModel):
    job_title: str
    days: int
    hires: int


class TimeToHire(CamelModel):
    average: int
    by_department: List[DepartmentTimeToHire]
    by_job: List[JobTimeToHire]


class JobPerformance(CamelModel):
    id: str
    title: str
    applications: int
    interviews: int
    hires: int
    conversion_rate: int


class TeamMemberActivity(CamelModel):
    user_id: str
    user_name: str
    user_email: str
    applications_reviewed: int
    interviews_conducted: int
    score: int


class PipelineVelocityStage(CamelModel):
    """Stage occupancy; ``avg_days`` stays 0 until transitions are recorded."""
    stage: str
    avg_days: int
    avg_days_computable: bool
    candidates: int
    note: str


class PeriodComparison(CamelModel):
    metric: str
    current: int
    previous: int
    change: int
    change_percent: int


class DepartmentMetrics(CamelModel):
    department: str
    open_positions: int
    applications: int
    interviews: int
    hires: int
    avg_time_to_fill: int


class StageDropoff(CamelModel):
    from_stage: str
    to_stage: str
    total_entered: int
    dropoff_count: int
    dropoff_rate: int


class Goal(CamelModel):
    id: str
    title: str
    current: int
    target: int
    unit: str
    deadline: date


class ConversionRates(CamelModel):
    application_to_screening: int
    screening_to_interview: int
    interview_to_offer: int
    offer_to_hire: int
    overall_conversion: int


class DashboardStats(CamelModel):
    """Everything the analytics dashboard renders for one date range."""
    date_range: str
    period_label: str
    overview: Overview
    hiring_funnel: List[FunnelStage]
    applications_by_source: List[SourceConversion]
    applications_trend: List[TrendPoint]
    time_to_hire: TimeToHire
    top_performing_jobs: List[JobPerformance]
    team_activity: List[TeamMemberActivity]
    pipeline_velocity: List[PipelineVelocityStage]
    period_comparison: List[PeriodComparison]
    department_metrics: List[DepartmentMetrics]
    dropoff_analysis: List[StageDropoff]
    goals: List[Goal]
    conversion_rates: ConversionRates
