"""Pydantic models for multi-photo upload response."""

from pydantic import BaseModel, ConfigDict, Field

from core.models.photo import FileDescriptor


class UploadPhotosResponse(BaseModel):
    """Response model for a successful batch upload."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="Success message")
    uploaded_count: int = Field(..., alias="uploadedCount", description="Number of stored files")
    files: list[FileDescriptor] = Field(..., description="Stored files, in submission order")
