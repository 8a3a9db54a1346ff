"""
Tutorials API — Page/Size Pagination
======================================

What:  Turns the `page` and `size` query values into a LIMIT/OFFSET pair,
       and shapes a find-and-count result into the paged envelope.
Why:   Shared by both list endpoints (all tutorials, published tutorials).

    page=2, size=3  →  limit=3, offset=6
    count=8, limit=3 → totalPages=3
"""

import math
import re
from typing import NamedTuple, Optional, Sequence

from app.exceptions import ValidationError
from app.schemas.tutorial import TutorialPageResponse, TutorialResponse

DEFAULT_PAGE_SIZE = 3

# "0" or a positive integer without leading zeros
PAGE_PATTERN = re.compile(r"0|[1-9]\d*", re.ASCII)
SIZE_PATTERN = re.compile(r"[1-9]\d*", re.ASCII)


class Pagination(NamedTuple):
    limit: int
    offset: int


def get_pagination(page: Optional[str] = None, size: Optional[str] = None) -> Pagination:
    """
    Validate raw query values and derive limit/offset.

    Absent or empty values fall back to page 0 and DEFAULT_PAGE_SIZE.

    Raises:
        ValidationError: page or size is malformed (→ 400)
    """
    if page and not PAGE_PATTERN.fullmatch(page):
        raise ValidationError(
            message="Page number must be 0 or a positive integer",
            field="page",
        )
    if size and not SIZE_PATTERN.fullmatch(size):
        raise ValidationError(
            message="Size must be a positive integer",
            field="size",
        )

    limit = int(size) if size else DEFAULT_PAGE_SIZE
    offset = int(page) * limit if page else 0
    return Pagination(limit=limit, offset=offset)


def get_paging_data(
    count: int, rows: Sequence[object], offset: int, limit: int
) -> TutorialPageResponse:
    """Build the paged envelope. currentPage is the offset that produced the page."""
    return TutorialPageResponse(
        total_items=count,
        tutorials=[TutorialResponse.model_validate(row) for row in rows],
        total_pages=math.ceil(count / limit),
        current_page=offset,
    )
