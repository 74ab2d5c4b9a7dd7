"""Concurrent read stage feeding the analytics calculators."""

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from ats_analytics import config
from ats_analytics.constants import FETCHED_INTERVIEW_STATUSES
from ats_analytics.exceptions import AggregationFailed
from ats_analytics.models import (
    Application,
    Candidate,
    Department,
    Interview,
    Job,
    Profile,
    TenantContext
)
from ats_analytics.repositories.application_repository import ApplicationRepository
from ats_analytics.repositories.candidate_repository import CandidateRepository
from ats_analytics.repositories.interview_repository import InterviewRepository
from ats_analytics.repositories.job_repository import JobRepository
from ats_analytics.repositories.organization_repository import OrganizationRepository

logger = logging.getLogger(__name__)


class DashboardCollections(BaseModel):
    """Snapshot of every collection the dashboard aggregates over."""
    jobs: List[Job] = []
    candidates: List[Candidate] = []
    applications: List[Application] = []
    interviews: List[Interview] = []
    departments: List[Department] = []
    profiles: List[Profile] = []


def fan_out(
    tasks: Dict[str, Callable[[], Any]],
    timeout_seconds: Optional[float] = None,
    max_workers: Optional[int] = None
) -> Dict[str, Any]:
    """Run independent read tasks concurrently and collect all results.

    Either every task succeeds within the timeout or the whole call fails;
    no partial result set is ever returned.

    Args:
        tasks: Mapping of result name to zero-argument callable.
        timeout_seconds: Budget for the whole fan-out.
        max_workers: Thread pool size.

    Returns:
        Mapping of result name to the task's return value.

    Raises:
        AggregationFailed: If any task raises or the timeout is exceeded.
    """
    if not tasks:
        return {}

    timeout_seconds = config.FETCH_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
    max_workers = max_workers or config.FETCH_WORKERS

    executor = ThreadPoolExecutor(
        max_workers=min(max_workers, len(tasks)),
        thread_name_prefix="analytics-fetch"
    )
    try:
        futures = {name: executor.submit(task) for name, task in tasks.items()}
        done, pending = wait(futures.values(), timeout=timeout_seconds, return_when=FIRST_EXCEPTION)

        for name, future in futures.items():
            if future in done and future.exception() is not None:
                error = future.exception()
                logger.error(f"Fetch of '{name}' failed: {error}")
                raise AggregationFailed(f"Failed to fetch {name}: {error}", cause=error) from error

        if pending:
            missing = sorted(name for name, future in futures.items() if future in pending)
            error = TimeoutError(
                f"Timed out after {timeout_seconds}s waiting for: {', '.join(missing)}"
            )
            logger.error(str(error))
            raise AggregationFailed(str(error), cause=error) from error

        return {name: future.result() for name, future in futures.items()}
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


class BulkFetchService:
    """Fetches the dashboard snapshot for one tenant.

    Attributes:
        job_repository: Repository for jobs.
        candidate_repository: Repository for candidates.
        application_repository: Repository for applications.
        interview_repository: Repository for interviews.
        organization_repository: Repository for departments and profiles.
        timeout_seconds: Budget for the whole fan-out.
    """

    def __init__(
        self,
        job_repository: JobRepository,
        candidate_repository: CandidateRepository,
        application_repository: ApplicationRepository,
        interview_repository: InterviewRepository,
        organization_repository: OrganizationRepository,
        timeout_seconds: Optional[float] = None
    ):
        self.job_repository = job_repository
        self.candidate_repository = candidate_repository
        self.application_repository = application_repository
        self.interview_repository = interview_repository
        self.organization_repository = organization_repository
        self.timeout_seconds = timeout_seconds

    def fetch_dashboard_collections(self, ctx: TenantContext) -> DashboardCollections:
        """Read every dashboard collection for the tenant concurrently.

        Args:
            ctx: Tenant to read for.

        Returns:
            DashboardCollections with all six collections populated (possibly empty).

        Raises:
            AggregationFailed: If any read fails or the fetch times out.
        """
        started = time.perf_counter()
        results = fan_out(
            {
                "jobs": lambda: self.job_repository.list_jobs(ctx),
                "candidates": lambda: self.candidate_repository.list_candidates(ctx),
                "applications": lambda: self.application_repository.list_applications(ctx),
                "interviews": lambda: self.interview_repository.list_interviews(
                    ctx, statuses=FETCHED_INTERVIEW_STATUSES
                ),
                "departments": lambda: self.organization_repository.list_departments(ctx),
                "profiles": lambda: self.organization_repository.list_profiles(ctx),
            },
            timeout_seconds=self.timeout_seconds,
        )
        collections = DashboardCollections(**results)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"Fetched dashboard snapshot for org {ctx.org_id} in {elapsed_ms:.0f}ms: "
            + ", ".join(f"{name}={len(rows)}" for name, rows in results.items())
        )
        return collections
