"""Service computing an interviewer's personal dashboard."""

import logging
from datetime import datetime
from typing import List, Optional

from ats_analytics.api.schemas.role_schemas import InterviewerStats, RecentInterview
from ats_analytics.constants import RECENT_ITEMS_LIMIT, UPCOMING_INTERVIEW_STATUSES
from ats_analytics.models import Interview, InterviewScorecard, TenantContext
from ats_analytics.repositories.interview_repository import InterviewRepository
from ats_analytics.services.fetch_service import fan_out
from ats_analytics.utils.dates import EPOCH, ensure_utc, utc_now
from ats_analytics.utils.rounding import percentage

logger = logging.getLogger(__name__)


class InterviewerStatsService:
    """Service for an interviewer's schedule and scorecard backlog.

    Attributes:
        interview_repository: Repository for interviews and scorecards.
    """

    def __init__(self, interview_repository: InterviewRepository):
        self.interview_repository = interview_repository

    def get_interviewer_stats(self, ctx: TenantContext, now: Optional[datetime] = None) -> InterviewerStats:
        """Compute interview and scorecard stats for ``ctx.user_id``.

        A completed interview without a scorecard from this interviewer
        counts as a pending scorecard.

        Args:
            ctx: Tenant and acting interviewer.
            now: Reference instant for "upcoming"; defaults to the current time.

        Returns:
            InterviewerStats for the user.

        Raises:
            ValueError: If the context carries no user.
            AggregationFailed: If the underlying reads fail.
        """
        if not ctx.user_id:
            raise ValueError("user_id is required for interviewer stats")

        now = ensure_utc(now) if now else utc_now()
        results = fan_out({
            "interviews": lambda: self.interview_repository.list_interviews(ctx, interviewer_id=ctx.user_id),
            "scorecards": lambda: self.interview_repository.list_scorecards(ctx, interviewer_id=ctx.user_id),
        })
        interviews: List[Interview] = results["interviews"]
        scorecards: List[InterviewScorecard] = results["scorecards"]

        scored_interview_ids = {scorecard.interview_id for scorecard in scorecards}
        completed = [i for i in interviews if i.status == "completed"]
        pending = sum(1 for i in completed if i.id not in scored_interview_ids)
        submitted = len(scorecards)

        upcoming = sum(
            1 for i in interviews
            if i.status in UPCOMING_INTERVIEW_STATUSES and i.scheduled_at and i.scheduled_at >= now
        )

        newest = sorted(interviews, key=lambda i: i.scheduled_at or EPOCH, reverse=True)
        recent = [
            RecentInterview(
                id=interview.id,
                scheduled_at=interview.scheduled_at,
                status=interview.status or "scheduled",
                application_id=interview.application_id,
                title=interview.title or "Interview",
                has_scorecard=interview.id in scored_interview_ids,
            )
            for interview in newest[:RECENT_ITEMS_LIMIT]
        ]

        logger.debug(
            f"Interviewer {ctx.user_id}: {len(interviews)} interviews, {pending} scorecards pending"
        )
        return InterviewerStats(
            upcoming_interviews=upcoming,
            completed_interviews=len(completed),
            total_interviews=len(interviews),
            scorecards_submitted=submitted,
            scorecards_pending=pending,
            scorecard_completion_rate=percentage(submitted, submitted + pending),
            recent_interviews=recent,
        )
