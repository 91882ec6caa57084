"""
Page-based pagination utilities.
"""

from core.models.pagination import PaginationInfo
from core.utils.constants import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT, MIN_LIMIT


class PagePagination:
    """
    Page-based pagination helper.

    Callers ask for a 1-based `page` of `limit` items. The store is
    queried with the equivalent offset, and the response carries the
    page envelope computed from the full result count.
    """

    @staticmethod
    def to_offset(page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> int:
        """
        Translate a page number into the number of items to skip.

        Example:
            to_offset(page=3, limit=20)
            → 40
        """
        return (page - 1) * limit

    @staticmethod
    def validate(page: int, limit: int) -> tuple[bool, str]:
        """
        Validate pagination parameters.

        Validation rules:
        - page must be 1 or greater
        - limit must be within [MIN_LIMIT, MAX_LIMIT]
        """
        if page < 1:
            return False, "Page must be a positive integer"

        if limit < MIN_LIMIT:
            return False, f"Limit must be at least {MIN_LIMIT}"

        if limit > MAX_LIMIT:
            return False, f"Limit must not exceed {MAX_LIMIT}"

        return True, ""

    @staticmethod
    def get_page_info(page: int, limit: int, total_count: int) -> PaginationInfo:
        """
        Build the pagination envelope for a list response.

        - total_pages is rounded up, and is 0 for an empty result
        - has_next holds exactly when page * limit < total_count
        """
        total_pages = (total_count + limit - 1) // limit if limit > 0 else 0

        return PaginationInfo(
            current_page=page,
            total_pages=total_pages,
            total_photos=total_count,
            has_next=page * limit < total_count,
            has_prev=page > 1,
        )
