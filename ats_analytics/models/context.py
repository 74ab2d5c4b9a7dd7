"""Request-scoped tenant context passed explicitly through every call."""

from typing import Optional

from pydantic import BaseModel, field_validator

from ats_analytics.constants import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES


class TenantContext(BaseModel):
    """Identifies the organization (and optionally the user) a request acts for.

    Attributes:
        org_id: Organization every query is scoped to.
        user_id: Acting user, required by per-user analytics.
        language: UI language, ``en`` or ``ar``.
    """
    org_id: str
    user_id: Optional[str] = None
    language: str = DEFAULT_LANGUAGE

    @field_validator("org_id")
    @classmethod
    def _require_org(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("org_id is required")
        return value.strip()

    @field_validator("language", mode="before")
    @classmethod
    def _normalise_language(cls, value: Optional[str]) -> str:
        if not value:
            return DEFAULT_LANGUAGE
        primary = str(value).split(",")[0].split("-")[0].strip().lower()
        return primary if primary in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE

    class Config:
        """Pydantic configuration."""
        frozen = True
