"""Pydantic models for single photo upload response."""

from pydantic import BaseModel, Field

from core.models.photo import FileDescriptor


class UploadPhotoResponse(BaseModel):
    """Response model for a successful single upload."""

    message: str = Field(..., description="Success message")
    file: FileDescriptor = Field(..., description="The stored file")
