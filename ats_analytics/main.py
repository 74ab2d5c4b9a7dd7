"""FastAPI application exposing hiring analytics for the ATS consoles."""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from supabase import Client

from ats_analytics import config
from ats_analytics.api.schemas.dashboard_schemas import DashboardStats
from ats_analytics.api.schemas.role_schemas import (
    CandidateListStats,
    InterviewerStats,
    OrgAdminStats,
    RecruiterStats
)
from ats_analytics.database.client import get_supabase_client
from ats_analytics.exceptions import AggregationFailed
from ats_analytics.models.context import TenantContext
from ats_analytics.repositories.application_repository import ApplicationRepository
from ats_analytics.repositories.candidate_repository import CandidateRepository
from ats_analytics.repositories.interview_repository import InterviewRepository
from ats_analytics.repositories.job_repository import JobRepository
from ats_analytics.repositories.offer_repository import OfferRepository
from ats_analytics.repositories.organization_repository import OrganizationRepository
from ats_analytics.services.candidate_list_service import CandidateListService
from ats_analytics.services.dashboard_service import DashboardService
from ats_analytics.services.fetch_service import BulkFetchService
from ats_analytics.services.interviewer_service import InterviewerStatsService
from ats_analytics.services.org_admin_service import OrgAdminStatsService
from ats_analytics.services.recruiter_service import RecruiterStatsService

logger = logging.getLogger(__name__)

app = FastAPI(title="ATS Hiring Analytics")

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Convert ValueError to appropriate HTTP exception.

    - "not found" → 404 Not Found
    - Everything else → 400 Bad Request
    """
    error_msg = str(exc).lower()
    status_code = 404 if "not found" in error_msg else 400

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc)}
    )


@app.exception_handler(AggregationFailed)
async def aggregation_failed_handler(request: Request, exc: AggregationFailed):
    """Report an incomplete snapshot as 503; no partial dashboard is returned."""
    logger.error(f"Analytics aggregation failed for {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": f"Analytics temporarily unavailable: {str(exc)}"}
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Convert unhandled exceptions to 500 without leaking stack traces."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal server error: {str(exc)}"}
    )


# Dependencies

def get_tenant_context(
    x_org_id: Optional[str] = Header(None),
    x_user_id: Optional[str] = Header(None),
    accept_language: Optional[str] = Header(None),
) -> TenantContext:
    """Build the tenant context from headers set by the identity layer."""
    if not x_org_id:
        raise HTTPException(status_code=400, detail="X-Org-Id header is required")

    return TenantContext(org_id=x_org_id, user_id=x_user_id, language=accept_language)


def get_dashboard_service(db_client: Client = Depends(get_supabase_client)) -> DashboardService:
    fetch_service = BulkFetchService(
        JobRepository(db_client),
        CandidateRepository(db_client),
        ApplicationRepository(db_client),
        InterviewRepository(db_client),
        OrganizationRepository(db_client),
    )
    return DashboardService(fetch_service)


def get_recruiter_service(db_client: Client = Depends(get_supabase_client)) -> RecruiterStatsService:
    return RecruiterStatsService(
        JobRepository(db_client),
        ApplicationRepository(db_client),
        InterviewRepository(db_client),
        CandidateRepository(db_client),
        OfferRepository(db_client),
    )


def get_interviewer_service(db_client: Client = Depends(get_supabase_client)) -> InterviewerStatsService:
    return InterviewerStatsService(InterviewRepository(db_client))


def get_candidate_list_service(db_client: Client = Depends(get_supabase_client)) -> CandidateListService:
    return CandidateListService(
        ApplicationRepository(db_client),
        CandidateRepository(db_client),
        JobRepository(db_client),
        OrganizationRepository(db_client),
    )


def get_org_admin_service(db_client: Client = Depends(get_supabase_client)) -> OrgAdminStatsService:
    return OrgAdminStatsService(OrganizationRepository(db_client))


@app.get("/")
def root():
    """Health check endpoint.

    Returns:
        Dictionary with status indicator.
    """
    return {"status": "ok"}


# Analytics endpoints
@app.get("/analytics/dashboard", response_model=DashboardStats)
def dashboard_endpoint(
    range_token: str = Query("30d", alias="range"),
    ctx: TenantContext = Depends(get_tenant_context),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Hiring analytics for the organization.

    Args:
        range_token: Period selector (7d, 30d, 90d, 12m, all). Unknown values
            are treated as all.

    Returns:
        DashboardStats with camelCase keys.
    """
    return service.get_dashboard_stats(ctx, range_token)


@app.get("/analytics/recruiter", response_model=RecruiterStats)
def recruiter_endpoint(
    ctx: TenantContext = Depends(get_tenant_context),
    service: RecruiterStatsService = Depends(get_recruiter_service),
):
    """Recruiter pipeline, activity and performance for the organization."""
    return service.get_recruiter_stats(ctx)


@app.get("/analytics/interviewer", response_model=InterviewerStats)
def interviewer_endpoint(
    ctx: TenantContext = Depends(get_tenant_context),
    service: InterviewerStatsService = Depends(get_interviewer_service),
):
    """Schedule and scorecard backlog for the calling interviewer (X-User-Id)."""
    return service.get_interviewer_stats(ctx)


@app.get("/analytics/candidates", response_model=CandidateListStats)
def candidate_list_endpoint(
    ctx: TenantContext = Depends(get_tenant_context),
    service: CandidateListService = Depends(get_candidate_list_service),
):
    """Flattened application list with candidate, job and department."""
    return service.get_candidate_list_stats(ctx)


@app.get("/analytics/org-admin", response_model=OrgAdminStats)
def org_admin_endpoint(
    ctx: TenantContext = Depends(get_tenant_context),
    service: OrgAdminStatsService = Depends(get_org_admin_service),
):
    """Team, role, department and invite overview."""
    return service.get_org_admin_stats(ctx)
