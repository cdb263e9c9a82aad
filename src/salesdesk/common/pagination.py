"""Pagination helpers shared by the paginated listing endpoints.

Query parameters arrive as raw strings and are coerced rather than
validated: anything missing, non-numeric or below 1 falls back to the
default instead of producing a 422 response."""

from typing import NamedTuple, Optional

from ..core.config import DEFAULT_PAGE, DEFAULT_PAGE_SIZE


class PageParams(NamedTuple):
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def coerce_positive_int(value: Optional[str], default: int) -> int:
    """Parse ``value`` as a positive integer, returning ``default`` otherwise."""
    if value is None:
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


def parse_page_params(page: Optional[str], limit: Optional[str]) -> PageParams:
    return PageParams(
        page=coerce_positive_int(page, DEFAULT_PAGE),
        limit=coerce_positive_int(limit, DEFAULT_PAGE_SIZE),
    )
