"""Hiring analytics aggregation over an in-memory snapshot.

Everything here is a pure function of the fetched collections and the
resolved date range: no I/O, no clock reads, no randomness. Calling
``build_dashboard_stats`` twice with the same inputs yields the same output.

Data-quality rules applied silently:

- Applications whose status is not a known funnel stage are left out of the
  stage maps (they still count towards totals).
- A hire contributes to time-to-hire only when both timestamps are present
  and the rounded day count is in ``[0, MAX_HIRE_DAYS)``.
- Hires on jobs without a department are left out of the department
  breakdown; department ids with no department row are reported as "Unknown".
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ats_analytics.api.schemas.dashboard_schemas import (
    ConversionRates,
    DashboardStats,
    DepartmentMetrics,
    DepartmentTimeToHire,
    FunnelStage,
    Goal,
    JobPerformance,
    JobTimeToHire,
    Overview,
    PeriodComparison,
    PipelineVelocityStage,
    SourceConversion,
    StageDropoff,
    TeamMemberActivity,
    TimeToHire,
    TrendPoint
)
from ats_analytics.constants import (
    APPLICATION_SCORE_WEIGHT,
    DEFAULT_APPLICATION_SOURCE,
    FUNNEL_STAGES,
    GOAL_TEMPLATES,
    INTERVIEW_REACHED_STATUSES,
    INTERVIEW_SCORE_WEIGHT,
    MAX_HIRE_DAYS,
    PIPELINE_VELOCITY_NOTE,
    PROGRESSION_STAGES,
    SOURCE_DISPLAY_NAMES,
    TEAM_ACTIVITY_LIMIT,
    TIME_TO_HIRE_BY_JOB_LIMIT,
    TOP_JOBS_LIMIT,
    UPCOMING_INTERVIEW_STATUSES
)
from ats_analytics.models import Application, Department, Interview, Job, Profile
from ats_analytics.services.fetch_service import DashboardCollections
from ats_analytics.utils.date_range import DateRangeBoundaries, localized_label
from ats_analytics.utils.dates import (
    days_between,
    end_of_month,
    in_half_open,
    in_window,
    start_of_month
)
from ats_analytics.utils.rounding import allocate_percentages, average, percentage, round_half_up

logger = logging.getLogger(__name__)


@dataclass
class HireDurations:
    """Running total of hire durations for one group."""
    total_days: int = 0
    count: int = 0
    title: Optional[str] = None

    def add(self, days: int) -> None:
        self.total_days += days
        self.count += 1

    @property
    def average_days(self) -> int:
        return average(self.total_days, self.count)


@dataclass
class OutcomeCounts:
    """Applications, interviews reached and hires for one group."""
    applications: int = 0
    interviews: int = 0
    hires: int = 0

    def add(self, application: Application) -> None:
        self.applications += 1
        if application.status in INTERVIEW_REACHED_STATUSES:
            self.interviews += 1
        if application.is_hired:
            self.hires += 1

    @property
    def conversion_rate(self) -> int:
        return percentage(self.hires, self.applications)


@dataclass
class InterviewerActivity:
    interviews: int = 0
    application_ids: Set[str] = field(default_factory=set)


# Shared helpers

def hire_days(application: Application, prefer_hired_at: bool = False) -> Optional[int]:
    """Whole days from application to hire, or None when unusable.

    Args:
        application: A hired application.
        prefer_hired_at: Use ``hired_at`` when recorded, else ``updated_at``.

    Returns:
        Rounded day count, or None when a timestamp is missing or the value
        falls outside ``[0, MAX_HIRE_DAYS)``.
    """
    hired = (application.hired_at or application.updated_at) if prefer_hired_at else application.updated_at
    if application.created_at is None or hired is None:
        return None

    days = round_half_up(days_between(application.created_at, hired))
    if days < 0 or days >= MAX_HIRE_DAYS:
        return None
    return days


def count_stages(applications: Iterable[Application]) -> Dict[str, int]:
    """Applications per funnel stage; unknown statuses are dropped."""
    counts = {stage: 0 for stage in FUNNEL_STAGES}
    for application in applications:
        if application.status in counts:
            counts[application.status] += 1
    return counts


def stage_label(stage: str) -> str:
    return stage[:1].upper() + stage[1:]


def format_source_name(source: str) -> str:
    return SOURCE_DISPLAY_NAMES.get(source, source)


def build_conversion_rates(stage_counts: Dict[str, int], total_applications: int) -> ConversionRates:
    """Stage-to-stage conversion using "reached this stage or later" counts."""
    screening = sum(stage_counts[s] for s in ("screening", "interviewing", "offered", "hired"))
    interviewing = sum(stage_counts[s] for s in ("interviewing", "offered", "hired"))
    offered = stage_counts["offered"] + stage_counts["hired"]
    hired = stage_counts["hired"]

    return ConversionRates(
        application_to_screening=percentage(screening, total_applications),
        screening_to_interview=percentage(interviewing, screening),
        interview_to_offer=percentage(offered, interviewing),
        offer_to_hire=percentage(hired, offered),
        overall_conversion=percentage(hired, total_applications),
    )


def change_percent(current: int, previous: int) -> int:
    if previous <= 0:
        return 0
    return round_half_up((current - previous) / previous * 100)


# Dashboard sections

def build_funnel(stage_counts: Dict[str, int], total_applications: int) -> List[FunnelStage]:
    counts = [stage_counts[stage] for stage in FUNNEL_STAGES]
    percentages = allocate_percentages(counts, total_applications or 1)
    return [
        FunnelStage(stage=stage_label(stage), count=count, percentage=share)
        for stage, count, share in zip(FUNNEL_STAGES, counts, percentages)
    ]


def build_source_conversion(applications: Sequence[Application]) -> List[SourceConversion]:
    by_source: Dict[str, OutcomeCounts] = {}
    for application in applications:
        source = application.source or DEFAULT_APPLICATION_SOURCE
        by_source.setdefault(source, OutcomeCounts()).add(application)

    rows = [
        SourceConversion(
            source=format_source_name(source),
            count=counts.applications,
            interviews=counts.interviews,
            hires=counts.hires,
            conversion_rate=counts.conversion_rate,
        )
        for source, counts in by_source.items()
    ]
    return sorted(rows, key=lambda row: row.count, reverse=True)


def build_trend(applications: Sequence[Application], boundaries: DateRangeBoundaries) -> List[TrendPoint]:
    """Daily application and hire counts for the last ``trend_days`` days."""
    last_day = boundaries.end.date()
    buckets: Dict[str, List[int]] = {}
    for offset in range(boundaries.trend_days - 1, -1, -1):
        buckets[(last_day - timedelta(days=offset)).isoformat()] = [0, 0]

    for application in applications:
        if application.created_at is None:
            continue
        bucket = buckets.get(application.created_at.date().isoformat())
        if bucket is None:
            continue
        bucket[0] += 1
        if application.is_hired:
            bucket[1] += 1

    return [
        TrendPoint(date=day, applications=counts[0], hired=counts[1])
        for day, counts in buckets.items()
    ]


def collect_hire_durations(
    hires: Sequence[Application],
    jobs_by_id: Dict[str, Job]
):
    """Group valid hire durations overall, by department id and by job id."""
    overall = HireDurations()
    by_department: Dict[str, HireDurations] = {}
    by_job: Dict[str, HireDurations] = {}
    excluded = 0

    for application in hires:
        days = hire_days(application)
        if days is None:
            excluded += 1
            continue

        overall.add(days)
        job = jobs_by_id.get(application.job_id) if application.job_id else None
        if job is None:
            continue

        if job.department_id:
            by_department.setdefault(job.department_id, HireDurations()).add(days)
        by_job.setdefault(job.id, HireDurations(title=job.title or "Untitled Position")).add(days)

    if excluded:
        logger.debug(f"Excluded {excluded} hire(s) from time-to-hire as outliers or incomplete")

    return overall, by_department, by_job


def build_time_to_hire(
    overall: HireDurations,
    by_department: Dict[str, HireDurations],
    by_job: Dict[str, HireDurations],
    department_names: Dict[str, Optional[str]]
) -> TimeToHire:
    department_rows = sorted(
        (
            DepartmentTimeToHire(
                department=department_names.get(department_id) or "Unknown",
                days=stats.average_days,
                hires=stats.count,
            )
            for department_id, stats in by_department.items()
        ),
        key=lambda row: row.days,
    )
    job_rows = sorted(
        (
            JobTimeToHire(job_title=stats.title, days=stats.average_days, hires=stats.count)
            for stats in by_job.values()
        ),
        key=lambda row: row.hires,
        reverse=True,
    )[:TIME_TO_HIRE_BY_JOB_LIMIT]

    return TimeToHire(
        average=overall.average_days,
        by_department=department_rows,
        by_job=job_rows,
    )


def build_top_jobs(jobs: Sequence[Job], counts_by_job: Dict[str, OutcomeCounts]) -> List[JobPerformance]:
    rows = []
    for job in jobs:
        if not job.is_active:
            continue
        counts = counts_by_job.get(job.id, OutcomeCounts())
        rows.append(JobPerformance(
            id=job.id,
            title=job.title or "Untitled Position",
            applications=counts.applications,
            interviews=counts.interviews,
            hires=counts.hires,
            conversion_rate=counts.conversion_rate,
        ))
    rows.sort(key=lambda row: row.applications, reverse=True)
    return rows[:TOP_JOBS_LIMIT]


def build_team_activity(interviews: Sequence[Interview], profiles: Sequence[Profile]) -> List[TeamMemberActivity]:
    """Rank interviewers by ``interviews * 10 + distinct applications * 5``."""
    activity: Dict[str, InterviewerActivity] = {}
    for interview in interviews:
        if not interview.interviewer_id:
            continue
        entry = activity.setdefault(interview.interviewer_id, InterviewerActivity())
        entry.interviews += 1
        if interview.application_id:
            entry.application_ids.add(interview.application_id)

    profiles_by_id = {profile.id: profile for profile in profiles}
    rows = []
    for user_id, entry in activity.items():
        profile = profiles_by_id.get(user_id)
        reviewed = len(entry.application_ids)
        rows.append(TeamMemberActivity(
            user_id=user_id,
            user_name=(profile.display_name if profile else None) or "Unknown",
            user_email=(profile.email if profile else None) or "",
            applications_reviewed=reviewed,
            interviews_conducted=entry.interviews,
            score=entry.interviews * INTERVIEW_SCORE_WEIGHT + reviewed * APPLICATION_SCORE_WEIGHT,
        ))

    rows.sort(key=lambda row: row.score, reverse=True)
    return rows[:TEAM_ACTIVITY_LIMIT]


def build_pipeline_velocity(stage_counts: Dict[str, int]) -> List[PipelineVelocityStage]:
    # Time in stage needs a transition log; only occupancy is real.
    return [
        PipelineVelocityStage(
            stage=stage_label(stage),
            avg_days=0,
            avg_days_computable=False,
            candidates=stage_counts[stage],
            note=PIPELINE_VELOCITY_NOTE,
        )
        for stage in PROGRESSION_STAGES
    ]


def build_period_comparison(
    collections: DashboardCollections,
    boundaries: DateRangeBoundaries,
    current_applications: int,
    current_hires: int,
    current_interviews: int
) -> List[PeriodComparison]:
    previous_start, previous_end = boundaries.previous_start, boundaries.previous_end
    previous_applications = previous_hires = previous_interviews = 0

    if boundaries.has_previous_period:
        previous_applications, previous_hires, previous_interviews = _previous_counts(
            collections, previous_start, previous_end
        )

    metrics = [
        ("Applications", current_applications, previous_applications),
        ("Hires", current_hires, previous_hires),
        ("Interviews", current_interviews, previous_interviews),
    ]
    return [
        PeriodComparison(
            metric=metric,
            current=current,
            previous=previous,
            change=current - previous,
            change_percent=change_percent(current, previous),
        )
        for metric, current, previous in metrics
    ]


def _previous_counts(collections: DashboardCollections, previous_start, previous_end):
    previous_applications = sum(
        1 for a in collections.applications if in_half_open(a.created_at, previous_start, previous_end)
    )
    previous_hires = sum(
        1 for a in collections.applications
        if a.is_hired and in_half_open(a.updated_at, previous_start, previous_end)
    )
    previous_interviews = sum(
        1 for i in collections.interviews if in_half_open(i.scheduled_at, previous_start, previous_end)
    )
    return previous_applications, previous_hires, previous_interviews


def build_department_metrics(
    departments: Sequence[Department],
    jobs: Sequence[Job],
    applications: Sequence[Application],
    hire_durations: Dict[str, HireDurations]
) -> List[DepartmentMetrics]:
    open_positions: Counter = Counter(
        job.department_id for job in jobs if job.department_id and job.is_active
    )
    department_by_job = {job.id: job.department_id for job in jobs if job.department_id}

    counts: Dict[str, OutcomeCounts] = {}
    for application in applications:
        department_id = department_by_job.get(application.job_id)
        if department_id:
            counts.setdefault(department_id, OutcomeCounts()).add(application)

    rows = []
    for department in departments:
        department_counts = counts.get(department.id, OutcomeCounts())
        durations = hire_durations.get(department.id)
        rows.append(DepartmentMetrics(
            department=department.name or "Unknown",
            open_positions=open_positions.get(department.id, 0),
            applications=department_counts.applications,
            interviews=department_counts.interviews,
            hires=department_counts.hires,
            avg_time_to_fill=durations.average_days if durations else 0,
        ))

    rows.sort(key=lambda row: row.applications, reverse=True)
    return rows


def build_dropoff(stage_counts: Dict[str, int]) -> List[StageDropoff]:
    """Estimate drop-off between adjacent stages from current occupancy.

    An application sitting in a later stage is assumed to have passed every
    earlier one, so "reached stage N" is the sum of counts from N onwards.
    """
    reached = [
        sum(stage_counts[stage] for stage in PROGRESSION_STAGES[index:])
        for index in range(len(PROGRESSION_STAGES))
    ]

    rows = []
    for index in range(len(PROGRESSION_STAGES) - 1):
        reached_from, reached_to = reached[index], reached[index + 1]
        dropped = reached_from - reached_to
        rows.append(StageDropoff(
            from_stage=stage_label(PROGRESSION_STAGES[index]),
            to_stage=stage_label(PROGRESSION_STAGES[index + 1]),
            total_entered=reached_from,
            dropoff_count=dropped,
            dropoff_rate=percentage(dropped, reached_from),
        ))
    return rows


def build_goals(boundaries: DateRangeBoundaries, hires: int, interviews: int, applications: int) -> List[Goal]:
    current_values = {
        "monthly_hires": hires,
        "interview_pipeline": interviews,
        "application_target": applications,
    }
    deadline = end_of_month(boundaries.end)
    return [
        Goal(
            id=template["id"],
            title=template["title"],
            current=current_values[template["id"]],
            target=template["target"],
            unit=template["unit"],
            deadline=deadline,
        )
        for template in GOAL_TEMPLATES
    ]


def build_dashboard_stats(
    collections: DashboardCollections,
    boundaries: DateRangeBoundaries,
    language: str = "en"
) -> DashboardStats:
    """Aggregate a tenant snapshot into the analytics dashboard.

    Args:
        collections: Snapshot returned by the bulk fetch stage.
        boundaries: Resolved current and comparison periods.
        language: Language for the period label.

    Returns:
        DashboardStats for the period.
    """
    start, end = boundaries.start, boundaries.end

    window_applications = [a for a in collections.applications if in_window(a.created_at, start, end)]
    window_hires = [
        a for a in collections.applications if a.is_hired and in_window(a.updated_at, start, end)
    ]
    window_interviews = [i for i in collections.interviews if in_window(i.scheduled_at, start, end)]

    jobs_by_id = {job.id: job for job in collections.jobs}
    department_names = {department.id: department.name for department in collections.departments}
    stage_counts = count_stages(window_applications)

    counts_by_job: Dict[str, OutcomeCounts] = {}
    for application in window_applications:
        if application.job_id:
            counts_by_job.setdefault(application.job_id, OutcomeCounts()).add(application)

    overall, by_department, by_job = collect_hire_durations(window_hires, jobs_by_id)

    month_start = start_of_month(end)
    hired_this_month = sum(
        1 for a in collections.applications if a.is_hired and in_window(a.updated_at, month_start, end)
    )
    offers_made = stage_counts["offered"] + stage_counts["hired"]

    overview = Overview(
        total_jobs=len(collections.jobs),
        active_jobs=sum(1 for job in collections.jobs if job.is_active),
        total_candidates=len(collections.candidates),
        total_applications=len(window_applications),
        hired_this_month=hired_this_month,
        hires_in_period=len(window_hires),
        interviews_scheduled=sum(
            1 for i in collections.interviews if i.status in UPCOMING_INTERVIEW_STATUSES
        ),
        offer_acceptance_rate=percentage(stage_counts["hired"], offers_made),
        avg_time_to_hire=overall.average_days,
    )

    return DashboardStats(
        date_range=boundaries.range,
        period_label=localized_label(boundaries, language),
        overview=overview,
        hiring_funnel=build_funnel(stage_counts, len(window_applications)),
        applications_by_source=build_source_conversion(window_applications),
        applications_trend=build_trend(collections.applications, boundaries),
        time_to_hire=build_time_to_hire(overall, by_department, by_job, department_names),
        top_performing_jobs=build_top_jobs(collections.jobs, counts_by_job),
        team_activity=build_team_activity(window_interviews, collections.profiles),
        pipeline_velocity=build_pipeline_velocity(stage_counts),
        period_comparison=build_period_comparison(
            collections,
            boundaries,
            current_applications=len(window_applications),
            current_hires=len(window_hires),
            current_interviews=len(window_interviews),
        ),
        department_metrics=build_department_metrics(
            collections.departments, collections.jobs, window_applications, by_department
        ),
        dropoff_analysis=build_dropoff(stage_counts),
        goals=build_goals(
            boundaries,
            hires=len(window_hires),
            interviews=len(window_interviews),
            applications=len(window_applications),
        ),
        conversion_rates=build_conversion_rates(stage_counts, len(window_applications)),
    )
