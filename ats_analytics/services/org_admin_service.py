"""Service computing the organization admin dashboard."""

import logging
from collections import Counter
from typing import Dict, Set

from ats_analytics.api.schemas.role_schemas import (
    DepartmentMembers,
    DepartmentStats,
    InviteStatus,
    OrgAdminStats,
    RecentMember,
    RoleDistribution,
    TeamOverview
)
from ats_analytics.constants import RECENT_ITEMS_LIMIT, ROLE_LABELS, TRACKED_ROLES
from ats_analytics.models import TenantContext
from ats_analytics.repositories.organization_repository import OrganizationRepository
from ats_analytics.services.fetch_service import fan_out
from ats_analytics.utils.dates import EPOCH
from ats_analytics.utils.rounding import percentage

logger = logging.getLogger(__name__)


class OrgAdminStatsService:
    """Service for team composition, roles, departments and invites.

    Attributes:
        organization_repository: Repository for organization data.
    """

    def __init__(self, organization_repository: OrganizationRepository):
        self.organization_repository = organization_repository

    def get_org_admin_stats(self, ctx: TenantContext) -> OrgAdminStats:
        """Compute organization admin analytics.

        Args:
            ctx: Tenant to report on.

        Returns:
            OrgAdminStats for the organization.
        """
        repository = self.organization_repository
        results = fan_out({
            "profiles": lambda: repository.list_profiles(ctx),
            "user_roles": lambda: repository.list_user_roles(ctx),
            "departments": lambda: repository.list_departments(ctx),
            "invites": lambda: repository.list_team_invites(ctx),
            "department_members": lambda: repository.list_user_role_departments(ctx),
        })
        profiles = results["profiles"]
        user_roles = results["user_roles"]

        # Role distribution
        role_counts = Counter(ur.role for ur in user_roles if ur.role in TRACKED_ROLES)
        total_assignments = sum(role_counts.values())
        role_distribution = [
            RoleDistribution(
                role=role,
                label=ROLE_LABELS.get(role, role),
                count=role_counts.get(role, 0),
                percentage=percentage(role_counts.get(role, 0), total_assignments),
            )
            for role in TRACKED_ROLES
        ]

        # Departments
        members_by_department: Dict[str, Set[str]] = {}
        for link in results["department_members"]:
            members_by_department.setdefault(link.department_id, set()).add(link.user_id)

        active_departments = [d for d in results["departments"] if d.is_active is not False]
        department_rows = sorted(
            (
                DepartmentMembers(
                    id=department.id,
                    name=department.name,
                    member_count=len(members_by_department.get(department.id, ())),
                )
                for department in active_departments
            ),
            key=lambda row: row.member_count,
            reverse=True,
        )

        # Invites
        invite_counts = Counter(invite.status for invite in results["invites"])

        # Recent members, with the first role seen per user
        first_role: Dict[str, str] = {}
        for user_role in user_roles:
            first_role.setdefault(user_role.user_id, user_role.role)

        newest = sorted(profiles, key=lambda p: p.created_at or EPOCH, reverse=True)
        recent_members = [
            RecentMember(
                id=profile.id,
                first_name=profile.first_name,
                last_name=profile.last_name,
                email=profile.email,
                role=first_role.get(profile.id),
                created_at=profile.created_at,
            )
            for profile in newest[:RECENT_ITEMS_LIMIT]
        ]

        logger.debug(f"Org admin stats for org {ctx.org_id}: {len(profiles)} members")
        return OrgAdminStats(
            team_overview=TeamOverview(
                total_members=len(profiles),
                active_members=sum(1 for p in profiles if p.is_active is not False),
            ),
            role_distribution=role_distribution,
            department_stats=DepartmentStats(
                total_departments=len(active_departments),
                departments=department_rows,
            ),
            invite_status=InviteStatus(
                pending=invite_counts.get("pending", 0),
                accepted=invite_counts.get("accepted", 0),
                expired=invite_counts.get("expired", 0),
            ),
            recent_members=recent_members,
            distinct_roles_assigned=len(role_counts),
        )
