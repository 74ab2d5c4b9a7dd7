"""Repository for candidate data access operations."""

from typing import List

from supabase import Client

from ats_analytics.models.candidate import Candidate
from ats_analytics.models.context import TenantContext
from ats_analytics.repositories.base_repository import BaseRepository


class CandidateRepository(BaseRepository):
    """Repository for reading candidates."""

    COLUMNS = "id, first_name, last_name, email, phone"

    def __init__(self, db_client: Client):
        super().__init__(db_client, "candidates")

    def list_candidates(self, ctx: TenantContext) -> List[Candidate]:
        return self.list_for_org(ctx, Candidate, self.COLUMNS)
