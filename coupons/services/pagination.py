"""Pagination metadata for catalog listings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PageMeta:
    """Where a page sits in a listing."""

    current_page: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous: bool
    has_next: bool


def compute_total_pages(total_count: int, page_size: int) -> int:
    """Number of pages needed for `total_count` rows (0 rows -> 0 pages)."""
    if total_count <= 0:
        return 0
    return -(-total_count // page_size)


def page_offset(page: int, page_size: int) -> int:
    """Row offset of the first item on `page` (1-based)."""
    return (page - 1) * page_size


def build_page_meta(page: int, total_count: int, page_size: int) -> PageMeta:
    """Assemble previous/next availability for a page.

    Out-of-range pages are not clamped: they simply have no rows and no "next".
    """
    total_pages = compute_total_pages(total_count, page_size)
    return PageMeta(
        current_page=page,
        page_size=page_size,
        total_count=total_count,
        total_pages=total_pages,
        has_previous=page > 1,
        has_next=page < total_pages,
    )
