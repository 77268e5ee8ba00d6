"""Page window math shared by every search endpoint."""

from __future__ import annotations

import math
from dataclasses import dataclass

from healthcare_platform.core.config import settings


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def resolve_window(
    page: int | None,
    limit: int | None,
    default_limit: int | None = None,
    max_limit: int | None = None,
) -> PageWindow:
    """Normalize requested paging.

    ``page`` absent or <= 0 becomes 1. ``limit`` absent or <= 0 becomes the
    entity default, and anything above ``max_limit`` is clamped. The resulting
    limit is therefore always positive.
    """
    fallback = default_limit or settings.DEFAULT_PAGE_SIZE
    ceiling = max_limit or settings.MAX_PAGE_SIZE

    resolved_page = page if page is not None and page > 0 else 1
    resolved_limit = limit if limit is not None and limit > 0 else fallback
    return PageWindow(page=resolved_page, limit=min(resolved_limit, ceiling))


def page_count(records: int, limit: int) -> int:
    """``ceil(records / limit)``; zero when nothing can be paged."""
    if limit <= 0:
        return 0
    return math.ceil(records / limit)
