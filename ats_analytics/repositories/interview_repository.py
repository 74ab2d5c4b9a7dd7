"""Repository for interview and scorecard data access operations."""

import json
from typing import Any, Dict, List, Optional, Sequence

from supabase import Client

from ats_analytics.models.context import TenantContext
from ats_analytics.models.interview import Interview, InterviewScorecard
from ats_analytics.repositories.base_repository import BaseRepository


class InterviewRepository(BaseRepository):
    """Repository for reading interviews and their scorecards.

    Attributes:
        db_client: Supabase client instance for database operations.
    """

    COLUMNS = "id, interviewer_id, status, scheduled_at, application_id, title"
    SCORECARD_COLUMNS = "id, interview_id, interviewer_id, criteria_scores"

    def __init__(self, db_client: Client):
        super().__init__(db_client, "interviews")

    # Interview Methods

    def list_interviews(
        self,
        ctx: TenantContext,
        statuses: Optional[Sequence[str]] = None,
        interviewer_id: Optional[str] = None
    ) -> List[Interview]:
        """Retrieve interviews for the tenant.

        Args:
            ctx: Tenant to read for.
            statuses: Only return interviews in one of these statuses.
            interviewer_id: Only return interviews run by this user.

        Returns:
            List of Interview models ordered by ``scheduled_at`` descending.
        """
        query = self.scoped_query(ctx, self.COLUMNS)

        if statuses:
            query = query.in_("status", list(statuses))
        if interviewer_id:
            query = query.eq("interviewer_id", interviewer_id)

        query = query.order("scheduled_at", desc=True)
        return self.to_models(self.fetch_rows(query), Interview)

    # Scorecard Methods

    def list_scorecards(self, ctx: TenantContext, interviewer_id: Optional[str] = None) -> List[InterviewScorecard]:
        """Retrieve interview scorecards for the tenant.

        Args:
            ctx: Tenant to read for.
            interviewer_id: Only return scorecards written by this user.

        Returns:
            List of InterviewScorecard models with decoded criteria scores.
        """
        query = self.scoped_query(ctx, self.SCORECARD_COLUMNS, table_name="interview_scorecards")

        if interviewer_id:
            query = query.eq("interviewer_id", interviewer_id)

        rows = self.fetch_rows(query, description="interview scorecards")
        return self.to_models([self._decode_scorecard(row) for row in rows], InterviewScorecard)

    @staticmethod
    def _decode_scorecard(row: Dict[str, Any]) -> Dict[str, Any]:
        # JSONB criteria_scores may come back as a string
        scores = row.get("criteria_scores")
        if isinstance(scores, str):
            row = {**row, "criteria_scores": json.loads(scores) if scores else []}
        elif scores is None:
            row = {**row, "criteria_scores": []}
        return row
