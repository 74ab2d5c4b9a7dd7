"""Repository for organization structure and membership data."""

from typing import List, Optional

from supabase import Client

from ats_analytics.models.context import TenantContext
from ats_analytics.models.organization import (
    Department,
    Profile,
    TeamInvite,
    UserRole,
    UserRoleDepartment
)
from ats_analytics.repositories.base_repository import BaseRepository


class OrganizationRepository(BaseRepository):
    """Repository for departments, team members, roles and invites.

    Attributes:
        db_client: Supabase client instance for database operations.
    """

    def __init__(self, db_client: Client):
        super().__init__(db_client, "departments")

    def list_departments(self, ctx: TenantContext) -> List[Department]:
        return self.list_for_org(ctx, Department, "id, name, is_active")

    def list_profiles(self, ctx: TenantContext, limit: Optional[int] = None) -> List[Profile]:
        """Retrieve team member profiles, newest first.

        Args:
            ctx: Tenant to read for.
            limit: Maximum number of profiles to return.

        Returns:
            List of Profile models.
        """
        query = (
            self.scoped_query(ctx, "id, first_name, last_name, email, is_active, created_at", table_name="profiles")
            .order("created_at", desc=True)
        )

        if limit:
            query = query.limit(limit)

        return self.to_models(self.fetch_rows(query, description="profiles"), Profile)

    def list_user_roles(self, ctx: TenantContext) -> List[UserRole]:
        query = self.scoped_query(ctx, "user_id, role", table_name="user_roles")
        return self.to_models(self.fetch_rows(query, description="user roles"), UserRole)

    def list_user_role_departments(self, ctx: TenantContext) -> List[UserRoleDepartment]:
        query = self.scoped_query(ctx, "user_id, department_id", table_name="user_role_departments")
        return self.to_models(
            self.fetch_rows(query, description="user role departments"), UserRoleDepartment
        )

    def list_team_invites(self, ctx: TenantContext) -> List[TeamInvite]:
        query = self.scoped_query(ctx, "id, status", table_name="team_invites")
        return self.to_models(self.fetch_rows(query, description="team invites"), TeamInvite)
