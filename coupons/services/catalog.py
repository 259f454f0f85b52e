"""Catalog repository: reads over categories, stores and deals.

Listing rules:
1. Filter by case-insensitive name substring (only when search is non-empty)
2. Filter by owning category slug (only when given)
3. Order by lower(name) ASC, or by non-expired deal count DESC
4. Store id ASC breaks ties, so pages are stable

Lookups by slug/id return None on a miss. Database errors propagate.
Each call opens its own session, so independent reads can run concurrently.
"""

from dataclasses import dataclass

from sqlalchemy import ColumnElement, Select, func, select, update
from sqlalchemy.orm import contains_eager, joinedload

from coupons.models import Category, Deal, Store
from coupons.services.query import SortKey, StoreQuery
from coupons.stores.postgres import get_session

# Largest OFFSET PostgreSQL accepts (bigint)
MAX_SQL_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class StoreRow:
    """Store in a listing, annotated with its non-expired deal count."""

    store: Store
    active_deal_count: int


@dataclass(frozen=True)
class StoreDetailRow:
    """Store with its category and every deal, best deals first."""

    store: Store
    deals: list[Deal]


@dataclass(frozen=True)
class CategoryRow:
    """Category with the number of stores it owns."""

    category: Category
    store_count: int


def _active_deal_counts():
    """Subquery: store_id -> number of deals not flagged as expired."""
    return (
        select(
            Deal.store_id.label("store_id"),
            func.count(Deal.id).label("active_deal_count"),
        )
        .where(Deal.is_expired.is_(False))
        .group_by(Deal.store_id)
        .subquery("active_deals")
    )


def store_filters(query: StoreQuery) -> list[ColumnElement[bool]]:
    """WHERE clauses for a store listing (empty search adds nothing)."""
    clauses: list[ColumnElement[bool]] = []
    if query.search:
        clauses.append(Store.name.icontains(query.search, autoescape=True))
    if query.category_slug:
        clauses.append(Category.slug == query.category_slug)
    return clauses


def build_store_list_statement(query: StoreQuery) -> Select:
    """SELECT for one page of stores plus their active deal counts."""
    active_deals = _active_deal_counts()
    active_count = func.coalesce(active_deals.c.active_deal_count, 0).label("active_deal_count")

    stmt = (
        select(Store, active_count)
        .join(Store.category)
        .outerjoin(active_deals, active_deals.c.store_id == Store.id)
        .options(contains_eager(Store.category))
        .where(*store_filters(query))
    )

    if query.sort is SortKey.DEALS:
        stmt = stmt.order_by(active_count.desc(), Store.id.asc())
    else:
        stmt = stmt.order_by(func.lower(Store.name).asc(), Store.id.asc())

    return stmt.offset(query.offset).limit(query.page_size)


def build_store_count_statement(query: StoreQuery) -> Select:
    """SELECT COUNT(*) over the same filters, ignoring pagination."""
    return (
        select(func.count(Store.id))
        .select_from(Store)
        .join(Store.category)
        .where(*store_filters(query))
    )


async def list_stores(query: StoreQuery) -> list[StoreRow]:
    """Get one page of stores for a listing.

    Args:
        query: Normalized listing query.

    Returns:
        StoreRow list in listing order (empty past the last page).
    """
    if query.offset > MAX_SQL_OFFSET:
        # Past any possible row; binding this OFFSET would overflow.
        return []

    async with get_session() as session:
        result = await session.execute(build_store_list_statement(query))
        return [
            StoreRow(store=store, active_deal_count=int(count))
            for store, count in result.all()
        ]


async def count_stores(query: StoreQuery) -> int:
    """Get total number of stores matching the listing filters."""
    async with get_session() as session:
        result = await session.execute(build_store_count_statement(query))
        return result.scalar() or 0


async def get_category_by_slug(slug: str) -> Category | None:
    """Get category by slug, or None if it does not exist."""
    async with get_session() as session:
        result = await session.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()


async def get_store_by_slug(slug: str) -> StoreDetailRow | None:
    """Get a store with its category and all deals.

    Deals are ordered: not expired first, then featured, then newest.
    """
    async with get_session() as session:
        result = await session.execute(
            select(Store)
            .options(joinedload(Store.category))
            .where(Store.slug == slug)
        )
        store = result.scalar_one_or_none()

        if not store:
            return None

        deals_result = await session.execute(
            select(Deal)
            .where(Deal.store_id == store.id)
            .order_by(
                Deal.is_expired.asc(),
                Deal.featured.desc(),
                Deal.created_at.desc(),
                Deal.id.desc(),
            )
        )
        return StoreDetailRow(store=store, deals=list(deals_result.scalars().all()))


async def list_categories() -> list[CategoryRow]:
    """Get all categories with store counts, ordered by name."""
    async with get_session() as session:
        result = await session.execute(
            select(Category, func.count(Store.id).label("store_count"))
            .outerjoin(Store, Store.category_id == Category.id)
            .group_by(Category.id)
            .order_by(Category.name.asc())
        )
        return [
            CategoryRow(category=category, store_count=int(count))
            for category, count in result.all()
        ]


async def increment_deal_usage(deal_id: int) -> int | None:
    """Increment a deal's usage counter.

    Returns:
        New usage count, or None if the deal does not exist.
    """
    async with get_session() as session:
        result = await session.execute(
            update(Deal)
            .where(Deal.id == deal_id)
            .values(usage_count=Deal.usage_count + 1)
            .returning(Deal.usage_count)
        )
        return result.scalar_one_or_none()
