"""Pydantic models for File Depot request and response bodies.

The server speaks camelCase JSON; attributes here are snake_case and map
through an alias generator. Models accept either form on input.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .types import FileId, FileName

T = TypeVar("T")


class _CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Envelope
# =============================================================================


class CommonResponse(_CamelModel, Generic[T]):
    """Envelope wrapping every JSON response: ``{success, message, data}``."""

    model_config = ConfigDict(extra="allow")

    success: bool
    message: str | None = None
    data: T | None = None
    # Some server errors carry a machine readable code next to the message
    code: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _code_as_text(cls, v: Any) -> Any:
        """Accept numeric codes, kept as their text form."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


# =============================================================================
# Request bodies
# =============================================================================


class ConfirmUploadRequest(_CamelModel):
    """Body of POST /api/files/confirm-upload."""

    id: FileId
    file_name: FileName | None = None


class BatchDownloadRequest(_CamelModel):
    """Body of POST /api/files/download/batch."""

    ids: list[FileId] = Field(min_length=1)


# =============================================================================
# Response payloads
# =============================================================================


class UploadUrlResponse(_CamelModel):
    """Presigned upload URL and the id reserved for the new file."""

    id: FileId
    upload_url: str
    expiry_seconds: int | None = None


class DownloadUrlResponse(_CamelModel):
    """Presigned download URL for a stored file."""

    download_url: str
    expiry_seconds: int | None = None


class StorageItem(_CamelModel):
    """Metadata of a stored file.

    The server owns the metadata set, so fields it adds beyond the ones
    declared here are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    id: FileId
    file_name: FileName | None = None
    size: int | None = None
    content_type: str | None = None
    status: str | None = None
    content: str | None = None
    """Extracted text, only populated when requested with ``with_content``."""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Chunk(_CamelModel):
    """A segment of a stored file, optionally with its embedding vector."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    index: int | None = None
    content: str | None = None
    embedding: list[float] | None = None
    """Only populated when requested with ``with_embedding``."""
