"""Repository for offer data access operations."""

from datetime import datetime
from typing import List, Optional

from supabase import Client

from ats_analytics.models.context import TenantContext
from ats_analytics.models.offer import Offer
from ats_analytics.repositories.base_repository import BaseRepository


class OfferRepository(BaseRepository):
    """Repository for reading offers."""

    COLUMNS = "id, status, application_id, created_at"

    def __init__(self, db_client: Client):
        super().__init__(db_client, "offers")

    def list_offers(self, ctx: TenantContext, created_since: Optional[datetime] = None) -> List[Offer]:
        """Retrieve offers for the tenant.

        Args:
            ctx: Tenant to read for.
            created_since: Only return offers created at or after this instant.

        Returns:
            List of Offer models ordered by ``created_at`` descending.
        """
        query = self.scoped_query(ctx, self.COLUMNS)

        if created_since is not None:
            query = query.gte("created_at", created_since.isoformat())

        query = query.order("created_at", desc=True)
        return self.to_models(self.fetch_rows(query), Offer)
