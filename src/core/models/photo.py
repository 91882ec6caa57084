"""Shared photo models."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictBytes, StrictInt, StrictStr

from core.utils.constants import VISIBILITY_PRIVATE, VISIBILITY_PUBLIC

Item = dict[str, Any]


class UploadFile(BaseModel):
    """A single file part taken from a multipart upload request."""

    field_name: StrictStr = Field(..., description="Form field the part was sent under")
    filename: StrictStr = Field(..., description="Client-supplied file name")
    mime_type: StrictStr = Field(..., description="Declared or sniffed MIME type")
    content: StrictBytes = Field(..., repr=False, description="Raw file bytes")

    @property
    def size_bytes(self) -> int:
        return len(self.content)


class StoredObject(BaseModel):
    """An object-storage entry, identified solely by its key."""

    key: StrictStr = Field(..., description="Storage key")
    url: StrictStr = Field(..., description="Public object URL")
    size: StrictInt = Field(..., description="Object size in bytes")
    last_modified: StrictStr = Field(..., description="ISO-8601 last modified timestamp (UTC)")
    original_name: StrictStr = Field(..., description="File name parsed from the key")
    mime_type: StrictStr | None = Field(None, description="Content type, when known")

    def to_response(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "url": self.url,
            "size": self.size,
            "lastModified": self.last_modified,
            "originalName": self.original_name,
        }


class PhotoRecord(BaseModel):
    """Photo metadata persisted in metadata-store mode."""

    id: StrictStr = Field(..., description="Unique photo identifier")
    owner_id: StrictStr = Field(..., description="Owning user identifier")
    storage_key: StrictStr = Field(..., description="Key of the backing storage object")
    original_name: StrictStr = Field(..., description="Original upload file name")
    url: StrictStr = Field(..., description="Public object URL")
    size_bytes: StrictInt = Field(..., description="Photo size in bytes")
    mime_type: StrictStr = Field(..., description="MIME type (e.g. image/jpeg)")

    description: StrictStr | None = Field(None, max_length=500)
    tags: set[StrictStr] = Field(default_factory=set)
    is_public: StrictBool = False
    view_count: StrictInt = 0

    uploaded_at: StrictStr = Field(..., description="ISO-8601 upload timestamp (UTC)")

    def to_item(self) -> Item:
        """Serialize for DynamoDB. Empty sets are not storable, so tags are omitted."""
        item: Item = {
            "photo_id": self.id,
            "owner_id": self.owner_id,
            "storage_key": self.storage_key,
            "original_name": self.original_name,
            "url": self.url,
            "size_bytes": self.size_bytes,
            "mime_type": self.mime_type,
            "is_public": self.is_public,
            "visibility": VISIBILITY_PUBLIC if self.is_public else VISIBILITY_PRIVATE,
            "view_count": self.view_count,
            "uploaded_at": self.uploaded_at,
        }

        if self.description is not None:
            item["description"] = self.description
        if self.tags:
            item["tags"] = set(self.tags)

        return item

    @classmethod
    def from_item(cls, item: Item) -> "PhotoRecord":
        return cls(
            id=item["photo_id"],
            owner_id=item["owner_id"],
            storage_key=item["storage_key"],
            original_name=item["original_name"],
            url=item["url"],
            size_bytes=_as_int(item["size_bytes"]),
            mime_type=item["mime_type"],
            description=item.get("description"),
            tags=set(item.get("tags") or ()),
            is_public=bool(item.get("is_public", False)),
            view_count=_as_int(item.get("view_count", 0)),
            uploaded_at=item["uploaded_at"],
        )

    def to_response(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "key": self.storage_key,
            "url": self.url,
            "originalName": self.original_name,
            "size": self.size_bytes,
            "mimeType": self.mime_type,
            "description": self.description,
            "tags": sorted(self.tags),
            "isPublic": self.is_public,
            "views": self.view_count,
            "uploadedAt": self.uploaded_at,
        }


class FileDescriptor(BaseModel):
    """Per-file result of a successful upload."""

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr
    url: StrictStr
    name: StrictStr = Field(..., description="Storage key of the uploaded object")
    size: StrictInt
    type: StrictStr
    uploaded_at: StrictStr = Field(..., alias="uploadedAt")


def _as_int(value: Any) -> int:
    if isinstance(value, Decimal):
        # boto3's resource layer hands numbers back as Decimal
        return int(value.to_integral_value())
    return int(value)
