"""Folder schemas."""

from pydantic import AliasChoices, Field, field_validator
from typing import Optional

from .base import ApiModel

_EXTERNAL_REF_ALIASES = AliasChoices("externalRef", "googleDriveId", "external_ref")


class FolderCreate(ApiModel):
    """Schema for creating a folder."""
    name: str
    parent_id: Optional[int] = None
    external_ref: Optional[str] = Field(
        default=None, alias="externalRef", validation_alias=_EXTERNAL_REF_ALIASES
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Folder name cannot be empty")
        return v


class FolderResponse(ApiModel):
    """Schema for folder response."""
    id: int
    name: str
    parent_id: Optional[int] = None
    external_ref: Optional[str] = Field(default=None, alias="externalRef")
    document_count: int = 0
