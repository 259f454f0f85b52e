"""Store listing query normalization.

Turns raw, untrusted query-string values into a `StoreQuery` descriptor:
- page: integer >= 1, anything else falls back to 1
- search: case-insensitive name substring, "" means no filter
- sort: "name" (A-Z) or "deals" (most active deals first), default "name"
- category: exact category slug, "" means no restriction

Bad input never raises; it falls back to defaults.
"""

from dataclasses import dataclass
from enum import Enum

from coupons.services.pagination import page_offset

# Fixed page sizes per listing context
STORES_PAGE_SIZE = 20
CATEGORY_STORES_PAGE_SIZE = 12


class SortKey(Enum):
    """Store listing order."""

    NAME = "name"  # ascending, case-insensitive
    DEALS = "deals"  # descending by non-expired deal count


@dataclass(frozen=True)
class StoreQuery:
    """Normalized filter/sort/pagination for one store listing request."""

    page: int
    page_size: int
    search: str = ""
    sort: SortKey = SortKey.NAME
    category_slug: str | None = None

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.page_size)

    @property
    def cache_key(self) -> str:
        """Stable key for page payload caching.

        Search keeps its casing: the payload echoes it back in `filters`.
        """
        return (
            f"p={self.page}:n={self.page_size}:s={self.search}"
            f":o={self.sort.value}:c={self.category_slug or ''}"
        )


def parse_page(raw: str | None) -> int:
    """Parse a 1-based page number, defaulting to 1."""
    if raw is None:
        return 1
    try:
        page = int(raw.strip())
    except ValueError:
        return 1
    return page if page >= 1 else 1


def parse_sort(raw: str | None) -> SortKey:
    """Map a raw sort value onto SortKey, defaulting to NAME."""
    if raw is None:
        return SortKey.NAME
    try:
        return SortKey(raw)
    except ValueError:
        return SortKey.NAME


def normalize_store_query(
    *,
    page: str | None = None,
    search: str | None = None,
    sort: str | None = None,
    category: str | None = None,
    page_size: int = STORES_PAGE_SIZE,
) -> StoreQuery:
    """Build a StoreQuery from raw query parameters.

    Args:
        page: Raw page number.
        search: Raw search term.
        sort: Raw sort key.
        category: Raw category slug (global store listing only).
        page_size: Page size of the listing context.

    Returns:
        Immutable StoreQuery.
    """
    return StoreQuery(
        page=parse_page(page),
        page_size=page_size,
        search=(search or "").strip(),
        sort=parse_sort(sort),
        category_slug=(category or "").strip() or None,
    )
