"""Pagination model."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt

from core.utils.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, MIN_LIMIT


class PaginationInfo(BaseModel):
    """Page-based pagination metadata for list responses."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: StrictInt = Field(..., alias="currentPage", description="1-based page number")
    total_pages: StrictInt = Field(..., alias="totalPages", description="ceil(total / limit)")
    total_photos: StrictInt = Field(..., alias="totalPhotos", description="Full result count")
    has_next: StrictBool = Field(..., alias="hasNext", description="Whether a later page exists")
    has_prev: StrictBool = Field(..., alias="hasPrev", description="Whether an earlier page exists")


class PageQuery(BaseModel):
    """Validated `page` / `limit` query string parameters."""

    model_config = ConfigDict(str_strip_whitespace=True)

    page: int = Field(default=DEFAULT_PAGE, ge=1, description="1-based page number")
    limit: int = Field(
        default=DEFAULT_LIMIT,
        ge=MIN_LIMIT,
        le=MAX_LIMIT,
        description=f"Results per page ({MIN_LIMIT}-{MAX_LIMIT})",
    )
