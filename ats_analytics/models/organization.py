"""Pydantic models for organization structure and membership."""

from datetime import datetime
from typing import Optional

from ats_analytics.models.base import RowModel


class Department(RowModel):
    """A department inside an organization."""
    id: str
    name: Optional[str] = None
    is_active: Optional[bool] = None


class Profile(RowModel):
    """A team member's profile.

    Attributes:
        id: User identifier shared with the identity provider.
        first_name: Given name.
        last_name: Family name.
        email: Contact email.
        is_active: False when the member has been deactivated.
        created_at: When the member joined.
    """
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    is_active: Optional[bool] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> Optional[str]:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or None


class UserRole(RowModel):
    """Role assignment for a team member."""
    user_id: str
    role: str


class UserRoleDepartment(RowModel):
    """Links a team member to a department."""
    user_id: str
    department_id: str


class TeamInvite(RowModel):
    """Invitation to join an organization."""
    id: str
    status: Optional[str] = None
