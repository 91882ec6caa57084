"""Pydantic models for photo delete request."""

from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeletePhotoRequest(BaseModel):
    """Validation model for the `{key+}` path parameter.

    The reference is a record id with a metadata store, otherwise the
    full storage key (which contains `/`).
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    photo_ref: str = Field(..., min_length=1, max_length=1024, description="Photo id or key")

    @field_validator("photo_ref", mode="before")
    @classmethod
    def decode_path(cls, value: object) -> object:
        if isinstance(value, str):
            return unquote(value)
        return value
