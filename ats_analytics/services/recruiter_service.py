"""Service computing the recruiter dashboard."""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from ats_analytics.aggregation import (
    HireDurations,
    build_conversion_rates,
    count_stages,
    hire_days
)
from ats_analytics.api.schemas.role_schemas import (
    MonthlyTrend,
    PreviousMonthActivity,
    RecentApplication,
    RecruiterActivity,
    RecruiterJobPerformance,
    RecruiterJobs,
    RecruiterPerformance,
    RecruiterPipeline,
    RecruiterStats,
    SourceBreakdown,
    SparklineData
)
from ats_analytics.constants import (
    FETCHED_INTERVIEW_STATUSES,
    INTERVIEW_REACHED_STATUSES,
    RECENT_ITEMS_LIMIT,
    RECRUITER_JOB_PERFORMANCE_LIMIT,
    RECRUITER_TREND_MONTHS
)
from ats_analytics.models import Application, Candidate, Interview, Job, Offer, TenantContext
from ats_analytics.repositories.application_repository import ApplicationRepository
from ats_analytics.repositories.candidate_repository import CandidateRepository
from ats_analytics.repositories.interview_repository import InterviewRepository
from ats_analytics.repositories.job_repository import JobRepository
from ats_analytics.repositories.offer_repository import OfferRepository
from ats_analytics.services.fetch_service import fan_out
from ats_analytics.utils.dates import EPOCH, ensure_utc, in_half_open, start_of_month, utc_now
from ats_analytics.utils.rounding import percentage

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = "unknown"


def _hire_date(application: Application) -> Optional[datetime]:
    return application.hired_at or application.updated_at


class RecruiterStatsService:
    """Service for the recruiter's view of the organization's pipeline.

    Attributes:
        job_repository: Repository for jobs.
        application_repository: Repository for applications.
        interview_repository: Repository for interviews.
        candidate_repository: Repository for candidates.
        offer_repository: Repository for offers.
    """

    def __init__(
        self,
        job_repository: JobRepository,
        application_repository: ApplicationRepository,
        interview_repository: InterviewRepository,
        candidate_repository: CandidateRepository,
        offer_repository: OfferRepository
    ):
        self.job_repository = job_repository
        self.application_repository = application_repository
        self.interview_repository = interview_repository
        self.candidate_repository = candidate_repository
        self.offer_repository = offer_repository

    def get_recruiter_stats(self, ctx: TenantContext, now: Optional[datetime] = None) -> RecruiterStats:
        """Compute recruiter analytics for the tenant.

        Args:
            ctx: Tenant to report on.
            now: Reference instant; defaults to the current UTC time.

        Returns:
            RecruiterStats for the current and previous calendar months.

        Raises:
            AggregationFailed: If any of the underlying reads fail.
        """
        now = ensure_utc(now) if now else utc_now()
        month_start = start_of_month(now)
        logger.info(f"Building recruiter stats for org {ctx.org_id}")

        results = fan_out({
            "jobs": lambda: self.job_repository.list_jobs(ctx),
            "applications": lambda: self.application_repository.list_applications(ctx),
            "interviews": lambda: self.interview_repository.list_interviews(
                ctx, statuses=FETCHED_INTERVIEW_STATUSES
            ),
            "candidates": lambda: self.candidate_repository.list_candidates(ctx),
            "offers": lambda: self.offer_repository.list_offers(ctx, created_since=month_start),
        })
        jobs: List[Job] = results["jobs"]
        applications: List[Application] = results["applications"]
        interviews: List[Interview] = results["interviews"]
        candidates: List[Candidate] = results["candidates"]
        offers: List[Offer] = results["offers"]

        last_month_start = start_of_month(now, months_back=1)
        hired = [a for a in applications if a.is_hired]
        stage_counts = count_stages(applications)

        monthly_trend = self._monthly_trend(now, applications, interviews, hired)

        return RecruiterStats(
            my_jobs=RecruiterJobs(
                total_jobs=len(jobs),
                active_jobs=sum(1 for job in jobs if job.is_active),
            ),
            my_pipeline=RecruiterPipeline(**stage_counts, total=len(applications)),
            my_activity=RecruiterActivity(
                applications_this_month=sum(
                    1 for a in applications if a.created_at and a.created_at >= month_start
                ),
                interviews_this_month=sum(
                    1 for i in interviews if i.scheduled_at and i.scheduled_at >= month_start
                ),
                offers_this_month=len(offers),
            ),
            my_performance=self._performance(hired),
            recent_applications=self._recent_applications(applications, candidates, jobs),
            monthly_trend=monthly_trend,
            source_breakdown=self._source_breakdown(applications),
            job_performance=self._job_performance(jobs, applications),
            conversion_rates=build_conversion_rates(stage_counts, len(applications)),
            sparkline_data=SparklineData(
                applications=[m.applications for m in monthly_trend],
                interviews=[m.interviews for m in monthly_trend],
                hires=[m.hires for m in monthly_trend],
                pipeline=[m.applications - m.hires for m in monthly_trend],
            ),
            previous_month_activity=PreviousMonthActivity(
                applications_last_month=sum(
                    1 for a in applications if in_half_open(a.created_at, last_month_start, month_start)
                ),
                interviews_last_month=sum(
                    1 for i in interviews if in_half_open(i.scheduled_at, last_month_start, month_start)
                ),
                hires_last_month=sum(
                    1 for a in hired if in_half_open(_hire_date(a), last_month_start, month_start)
                ),
            ),
        )

    @staticmethod
    def _performance(hired: List[Application]) -> RecruiterPerformance:
        durations = HireDurations()
        for application in hired:
            days = hire_days(application, prefer_hired_at=True)
            if days is not None:
                durations.add(days)

        return RecruiterPerformance(total_hires=len(hired), avg_time_to_hire=durations.average_days)

    @staticmethod
    def _recent_applications(
        applications: List[Application],
        candidates: List[Candidate],
        jobs: List[Job]
    ) -> List[RecentApplication]:
        candidates_by_id = {candidate.id: candidate for candidate in candidates}
        titles_by_job = {job.id: job.title for job in jobs}
        newest = sorted(applications, key=lambda a: a.created_at or EPOCH, reverse=True)

        recent = []
        for application in newest[:RECENT_ITEMS_LIMIT]:
            candidate = candidates_by_id.get(application.candidate_id)
            name_parts = [candidate.first_name, candidate.last_name] if candidate else []
            candidate_name = " ".join(part for part in name_parts if part) or "Unknown Candidate"

            recent.append(RecentApplication(
                id=application.id,
                status=application.status,
                candidate_name=candidate_name,
                job_title=titles_by_job.get(application.job_id) or "Unknown Job",
                applied_at=application.created_at,
            ))
        return recent

    @staticmethod
    def _monthly_trend(
        now: datetime,
        applications: List[Application],
        interviews: List[Interview],
        hired: List[Application]
    ) -> List[MonthlyTrend]:
        trend = []
        for months_back in range(RECRUITER_TREND_MONTHS - 1, -1, -1):
            month_start = start_of_month(now, months_back=months_back)
            month_end = start_of_month(now, months_back=months_back - 1)

            trend.append(MonthlyTrend(
                month=f"{month_start.year}-{month_start.month:02d}",
                applications=sum(
                    1 for a in applications if in_half_open(a.created_at, month_start, month_end)
                ),
                interviews=sum(
                    1 for i in interviews if in_half_open(i.scheduled_at, month_start, month_end)
                ),
                hires=sum(1 for a in hired if in_half_open(_hire_date(a), month_start, month_end)),
            ))
        return trend

    @staticmethod
    def _source_breakdown(applications: List[Application]) -> List[SourceBreakdown]:
        counts: Dict[str, List[int]] = {}
        for application in applications:
            entry = counts.setdefault(application.source or UNKNOWN_SOURCE, [0, 0])
            entry[0] += 1
            if application.is_hired:
                entry[1] += 1

        rows = [
            SourceBreakdown(source=source, count=total, hires=hires, conversion_rate=percentage(hires, total))
            for source, (total, hires) in counts.items()
        ]
        return sorted(rows, key=lambda row: row.count, reverse=True)

    @staticmethod
    def _job_performance(jobs: List[Job], applications: List[Application]) -> List[RecruiterJobPerformance]:
        by_job: Dict[str, List[Application]] = {job.id: [] for job in jobs}
        for application in applications:
            if application.job_id in by_job:
                by_job[application.job_id].append(application)

        rows = []
        for job in jobs:
            job_applications = by_job[job.id]
            if not job_applications:
                continue

            durations = HireDurations()
            hires = 0
            for application in job_applications:
                if application.is_hired:
                    hires += 1
                    days = hire_days(application, prefer_hired_at=True)
                    if days is not None:
                        durations.add(days)

            rows.append(RecruiterJobPerformance(
                job_id=job.id,
                title=job.title or "Untitled Position",
                status=job.status,
                applications=len(job_applications),
                interviews=sum(1 for a in job_applications if a.status in INTERVIEW_REACHED_STATUSES),
                hires=hires,
                conversion_rate=percentage(hires, len(job_applications)),
                avg_time_to_hire=durations.average_days,
            ))

        rows.sort(key=lambda row: row.applications, reverse=True)
        return rows[:RECRUITER_JOB_PERFORMANCE_LIMIT]
