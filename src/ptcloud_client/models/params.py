"""Optional parameters for each remote operation.

Each model documents the options a command accepts and serialises them to
the wire names the service expects. ``None`` means "let the service use its
default" and is never sent.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ptcloud_client.models.types import MediaProtocol, ThumbnailFormat, ThumbnailSize


class OperationParams(BaseModel):
    """Base class for per-operation parameters."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    def to_options(self) -> dict[str, str]:
        """Serialise set fields to string options (booleans as ``true``/``false``)."""
        options: dict[str, str] = {}
        dumped: dict[str, Any] = self.model_dump(by_alias=True, exclude_none=True)
        for key, value in dumped.items():
            options[key] = str(value).lower() if isinstance(value, bool) else str(value)
        return options


class MetadataParams(OperationParams):
    """Options for ``Metadata`` and ``MetadataShare``."""

    file_limit: int | None = Field(
        default=None, ge=1, description="Maximum entries listed for a folder (default 10000)"
    )
    hash_value: str | None = Field(
        default=None,
        alias="hash",
        description="Hash from a previous call; the service answers 304 if nothing changed",
    )
    list_contents: bool | None = Field(
        default=None, alias="list", description="Include the folder's contents"
    )
    include_deleted: bool | None = Field(default=None, description="Include deleted entries")
    rev: str | None = Field(default=None, description="Revision of the file")


class ListParams(OperationParams):
    """Options for ``List``."""

    file_limit: int | None = Field(default=None, ge=1, description="Maximum entries listed")
    hash_value: str | None = Field(default=None, alias="hash", description="Previous listing hash")
    include_deleted: bool | None = Field(default=None, description="Include deleted entries")
    mime_type: str | None = Field(default=None, description="Only entries of this MIME type")


class SearchParams(OperationParams):
    """Options for ``Search``. The query itself is a required argument."""

    file_limit: int | None = Field(default=None, ge=1, description="Maximum results (max 1000)")
    include_deleted: bool | None = Field(default=None, description="Include deleted entries")
    mime_type: str | None = Field(default=None, description="Only results of this MIME type")


class RevisionsParams(OperationParams):
    """Options for ``Revisions``."""

    rev_limit: int | None = Field(default=None, ge=1, description="Maximum revisions (default 10)")


class ThumbnailParams(OperationParams):
    """Options for ``Thumbnails``."""

    image_format: ThumbnailFormat | None = Field(default=None, alias="format")
    size: ThumbnailSize | None = None


class MediaParams(OperationParams):
    """Options for ``Media``."""

    protocol: MediaProtocol | None = Field(default=None, description="Streaming protocol")


class DeltaParams(OperationParams):
    """Options for ``Delta``."""

    cursor: str | None = Field(default=None, description="Cursor returned by the previous call")


class GetFileParams(OperationParams):
    """Options for downloading a file."""

    rev: str | None = Field(default=None, description="Revision to download")


class PutFileParams(OperationParams):
    """Options for uploading a file."""

    overwrite: bool | None = Field(default=None, description="Replace an existing file")
    parent_rev: str | None = Field(default=None, description="Revision being replaced")
