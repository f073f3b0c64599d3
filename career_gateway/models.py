"""
Shared Pydantic models for the gateway.

Only the fields this service inspects are modelled; everything else in a
request body is relayed to the upstream untouched.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobStatus(str, Enum):
    """Upstream job lifecycle states."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"


# === Application management requests ===

class StatusUpdateRequest(BaseModel):
    """Body for PUT /applications/{id}/status. Status is forwarded verbatim."""

    status: str = Field("", description="New application status")
    note: Optional[str] = Field(None, description="Optional note recorded with the change")


class BulkStatusUpdateRequest(BaseModel):
    """Body for POST /applications/bulk-update."""

    ids: List[str] = Field(default_factory=list, description="Application identifiers")
    status: str = Field("", description="New status for every listed application")


class NoteRequest(BaseModel):
    """Body for POST /applications/{id}/notes."""

    content: str = Field("", description="Note text")
    is_internal: bool = Field(False, alias="isInternal", description="Hide from the candidate")

    model_config = ConfigDict(populate_by_name=True)


# === Upload models ===

class PresignedURLRequest(BaseModel):
    """Body for POST /upload/presigned-url."""

    filename: str = Field("", description="Original file name, used for the extension")
    content_type: str = Field("", alias="contentType", description="MIME type the client will PUT")
    size: Optional[int] = Field(None, ge=0, description="Declared file size in bytes")

    model_config = ConfigDict(populate_by_name=True)


class UploadResponse(BaseModel):
    """Result of a direct resume upload."""

    success: bool = True
    url: str
    filename: str
    originalFilename: str
    size: int
    contentType: str


class PresignedURLResponse(BaseModel):
    """Pre-signed upload URL plus the public URL the object will have."""

    success: bool = True
    uploadUrl: str
    key: str
    url: str
    expiresIn: int
