"""Shared base for response schemas."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialised with camelCase keys."""

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
