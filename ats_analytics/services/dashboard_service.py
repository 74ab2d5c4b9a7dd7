"""Service that assembles the hiring analytics dashboard."""

import logging
import time
from datetime import datetime
from typing import Optional

from ats_analytics.aggregation import build_dashboard_stats
from ats_analytics.api.schemas.dashboard_schemas import DashboardStats
from ats_analytics.models.context import TenantContext
from ats_analytics.services.fetch_service import BulkFetchService
from ats_analytics.utils.date_range import resolve_date_range

logger = logging.getLogger(__name__)


class DashboardService:
    """Resolves the period, fetches the snapshot and aggregates it.

    Attributes:
        fetch_service: BulkFetchService used to read the tenant snapshot.
    """

    def __init__(self, fetch_service: BulkFetchService):
        """Initialize the service.

        Args:
            fetch_service: BulkFetchService instance.
        """
        self.fetch_service = fetch_service

    def get_dashboard_stats(
        self,
        ctx: TenantContext,
        range_token: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> DashboardStats:
        """Compute dashboard analytics for a tenant and period.

        Args:
            ctx: Tenant the dashboard is for.
            range_token: One of 7d, 30d, 90d, 12m, all; anything else means all.
            now: Reference instant for the period; defaults to the current time.

        Returns:
            DashboardStats for the resolved period.

        Raises:
            AggregationFailed: If the snapshot cannot be fetched in full.
        """
        boundaries = resolve_date_range(range_token, now=now)
        logger.info(f"Building dashboard for org {ctx.org_id}, range={boundaries.range}")

        started = time.perf_counter()
        collections = self.fetch_service.fetch_dashboard_collections(ctx)
        stats = build_dashboard_stats(collections, boundaries, language=ctx.language)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Dashboard for org {ctx.org_id} ready in {elapsed_ms:.0f}ms "
            f"({stats.overview.total_applications} applications in period)"
        )
        return stats
