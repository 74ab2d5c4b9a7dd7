"""Service building the flattened candidate list for reporting."""

import logging
from collections import Counter

from ats_analytics.api.schemas.role_schemas import CandidateListItem, CandidateListStats
from ats_analytics.constants import DEFAULT_APPLICATION_SOURCE
from ats_analytics.models import TenantContext
from ats_analytics.repositories.application_repository import ApplicationRepository
from ats_analytics.repositories.candidate_repository import CandidateRepository
from ats_analytics.repositories.job_repository import JobRepository
from ats_analytics.repositories.organization_repository import OrganizationRepository
from ats_analytics.services.fetch_service import fan_out

logger = logging.getLogger(__name__)


class CandidateListService:
    """Joins applications with their candidate, job and department.

    The joins happen in memory over four independent reads rather than a
    nested database join.

    Attributes:
        application_repository: Repository for applications.
        candidate_repository: Repository for candidates.
        job_repository: Repository for jobs.
        organization_repository: Repository for departments.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        candidate_repository: CandidateRepository,
        job_repository: JobRepository,
        organization_repository: OrganizationRepository
    ):
        self.application_repository = application_repository
        self.candidate_repository = candidate_repository
        self.job_repository = job_repository
        self.organization_repository = organization_repository

    def get_candidate_list_stats(self, ctx: TenantContext) -> CandidateListStats:
        """Build one row per application, newest first, with status counts.

        Args:
            ctx: Tenant to report on.

        Returns:
            CandidateListStats with the joined rows.
        """
        results = fan_out({
            "applications": lambda: self.application_repository.list_applications(ctx),
            "candidates": lambda: self.candidate_repository.list_candidates(ctx),
            "jobs": lambda: self.job_repository.list_jobs(ctx),
            "departments": lambda: self.organization_repository.list_departments(ctx),
        })

        candidates_by_id = {candidate.id: candidate for candidate in results["candidates"]}
        department_names = {
            department.id: department.name or "Unknown" for department in results["departments"]
        }
        jobs_by_id = {job.id: job for job in results["jobs"]}

        items = []
        for application in results["applications"]:
            candidate = candidates_by_id.get(application.candidate_id)
            job = jobs_by_id.get(application.job_id)

            items.append(CandidateListItem(
                id=application.id,
                first_name=(candidate.first_name or "") if candidate else "Unknown",
                last_name=(candidate.last_name or "") if candidate else "",
                email=(candidate.email or "") if candidate else "",
                phone=candidate.phone if candidate else None,
                source=application.source or DEFAULT_APPLICATION_SOURCE,
                status=application.status or "new",
                job_title=(job.title or "Untitled Position") if job else "Unknown Position",
                department=department_names.get(job.department_id, "Unassigned") if job else "Unassigned",
                applied_at=application.created_at,
                last_updated=application.updated_at,
            ))

        logger.debug(f"Candidate list for org {ctx.org_id}: {len(items)} rows")
        return CandidateListStats(
            candidates=items,
            total_count=len(items),
            status_counts=dict(Counter(item.status for item in items)),
        )
