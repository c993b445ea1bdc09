"""Document schemas."""

from pydantic import AliasChoices, Field, field_validator
from datetime import datetime
from typing import Optional, List

from ..models.document import DEFAULT_MIME_TYPE, DocumentStatus
from .base import ApiModel
from .user import validate_email_address

_EXTERNAL_REF_ALIASES = AliasChoices("externalRef", "googleDriveId", "external_ref")


def _strip_title(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("Title cannot be empty")
    return v


class DocumentBase(ApiModel):
    """Fields shared by direct creation and contributions."""
    title: str
    description: Optional[str] = None
    file_name: str = Field(min_length=1)
    file_size: int = Field(ge=0)  # bytes
    page_count: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None  # None -> application/pdf
    folder_id: Optional[int] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _strip_title(v)


class DocumentCreate(DocumentBase):
    """Schema for creating an (immediately approved) document."""
    external_ref: str = Field(
        min_length=1, alias="externalRef", validation_alias=_EXTERNAL_REF_ALIASES
    )
    download_url: Optional[str] = None  # None -> ""
    is_favorite: bool = False
    uploaded_by: Optional[int] = None
    uploader_name: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Giáo Trình Toán Học Cơ Bản",
                    "description": "Tài liệu học tập toán học dành cho học sinh cấp 2 và cấp 3",
                    "fileName": "giao-trinh-toan-hoc-co-ban.pdf",
                    "fileSize": 2547832,
                    "pageCount": 145,
                    "externalRef": "1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms",
                    "downloadUrl": "https://drive.google.com/file/d/1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms/view",
                    "folderId": 2,
                }
            ]
        }
    }


class DocumentUpdate(ApiModel):
    """Partial update. Only fields present in the payload are applied.

    download_count is absent on purpose: it only moves through
    increment_download_count.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    page_count: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None
    external_ref: Optional[str] = Field(
        default=None, alias="externalRef", validation_alias=_EXTERNAL_REF_ALIASES
    )
    download_url: Optional[str] = None
    folder_id: Optional[int] = None
    is_favorite: Optional[bool] = None
    uploader_name: Optional[str] = None
    status: Optional[DocumentStatus] = None
    moderator_notes: Optional[str] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return _strip_title(v) if v is not None else v

    def changes(self) -> dict:
        """Fields explicitly provided by the caller, as plain values."""
        data = self.model_dump(exclude_unset=True)
        if isinstance(data.get("status"), DocumentStatus):
            data["status"] = data["status"].value
        return data


class DocumentResponse(ApiModel):
    """Schema for document response."""
    id: int
    title: str
    description: Optional[str] = None
    file_name: str
    file_size: int
    page_count: Optional[int] = None
    mime_type: str = DEFAULT_MIME_TYPE
    external_ref: str = Field(alias="externalRef")
    download_url: Optional[str] = None
    folder_id: Optional[int] = None
    is_favorite: bool = False
    download_count: int = 0
    uploaded_by: Optional[int] = None
    uploader_name: Optional[str] = None
    uploaded_at: datetime
    status: DocumentStatus
    moderator_notes: Optional[str] = None


class DownloadResponse(ApiModel):
    """Retrieval pointer handed to the client on download."""
    download_url: Optional[str] = None


# --- Contribution & moderation ---

class ContributionCreate(DocumentBase):
    """Public contribution form. The uploader is identified by email."""
    uploader_name: str
    uploader_email: str

    @field_validator('uploader_name')
    @classmethod
    def validate_uploader_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Uploader name is required")
        return v

    @field_validator('uploader_email')
    @classmethod
    def validate_uploader_email(cls, v: str) -> str:
        return validate_email_address(v)


class ApproveRequest(ApiModel):
    """Moderator approval; notes are optional."""
    moderator_notes: Optional[str] = None


class RejectRequest(ApiModel):
    """Moderator rejection; notes are mandatory."""
    moderator_notes: str

    @field_validator('moderator_notes')
    @classmethod
    def validate_notes(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Moderator notes are required for rejection")
        return v


# --- Drive import ---

class DriveFile(ApiModel):
    """One entry of an external Drive file listing."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    mime_type: str = DEFAULT_MIME_TYPE
    size: Optional[int] = Field(default=None, ge=0)  # Drive reports size as a string
    created_time: Optional[datetime] = None  # becomes uploaded_at on import
    web_view_link: Optional[str] = None
    web_content_link: Optional[str] = None
    parents: List[str] = []


class DriveSyncRequest(ApiModel):
    """Files to import, optionally into one explicit folder."""
    folder_id: Optional[int] = None
    files: List[DriveFile] = []


class DriveSyncResult(ApiModel):
    """Outcome of an import run."""
    imported: int
    skipped: int
    documents: List[DocumentResponse] = []


class DriveSyncResponse(DriveSyncResult):
    message: str


# --- Statistics ---

class LibraryStats(ApiModel):
    """Aggregate counters for the whole library."""
    folders: int
    approved_documents: int
    pending_documents: int
    rejected_documents: int
    users: int
    total_downloads: int
