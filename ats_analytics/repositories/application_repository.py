"""Repository for application data access operations."""

from typing import List

from supabase import Client

from ats_analytics.models.application import Application
from ats_analytics.models.context import TenantContext
from ats_analytics.repositories.base_repository import BaseRepository


class ApplicationRepository(BaseRepository):
    """Repository for reading job applications.

    Attributes:
        db_client: Supabase client instance for database operations.
    """

    COLUMNS = "id, status, source, job_id, candidate_id, created_at, updated_at, hired_at"

    def __init__(self, db_client: Client):
        super().__init__(db_client, "applications")

    def list_applications(self, ctx: TenantContext) -> List[Application]:
        """Retrieve all applications for the tenant, newest first.

        Args:
            ctx: Tenant to read for.

        Returns:
            List of Application models ordered by ``created_at`` descending.
        """
        query = self.scoped_query(ctx, self.COLUMNS).order("created_at", desc=True)
        return self.to_models(self.fetch_rows(query), Application)
