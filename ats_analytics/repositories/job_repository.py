"""Repository for job data access operations."""

from typing import List

from supabase import Client

from ats_analytics.models.context import TenantContext
from ats_analytics.models.job import Job
from ats_analytics.repositories.base_repository import BaseRepository


class JobRepository(BaseRepository):
    """Repository for reading job postings."""

    COLUMNS = "id, status, department_id, title, created_at"

    def __init__(self, db_client: Client):
        super().__init__(db_client, "jobs")

    def list_jobs(self, ctx: TenantContext) -> List[Job]:
        """Retrieve all jobs for the tenant.

        Args:
            ctx: Tenant to read for.

        Returns:
            List of Job models.
        """
        return self.list_for_org(ctx, Job, self.COLUMNS)
