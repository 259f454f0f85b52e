"""Catalog page payloads.

Composes query normalization, repository reads and presentation helpers into
the response schemas served by the UI routes:
- Store listing (global and category-scoped)
- Store detail with active / expired deals
- Categories overview

The row, count and (global listing) category reads run concurrently; if any
fails the whole request fails. Payloads are cached in Redis when available.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
import logging
from typing import TypeVar

from pydantic import BaseModel
from redis.exceptions import RedisError

from coupons.models import Category, Deal
from coupons.schemas import (
    CategoriesResponse,
    CategoryRef,
    CategoryStoresResponse,
    CategorySummary,
    DealView,
    ListingFilters,
    StoreDetailResponse,
    StoreListResponse,
    StoreSummary,
)
from coupons.services.catalog import (
    CategoryRow,
    StoreRow,
    count_stores,
    get_category_by_slug,
    get_store_by_slug,
    list_categories,
    list_stores,
)
from coupons.services.discounts import (
    days_until_expiration,
    format_discount_label,
    is_expiring_soon,
    split_deals,
)
from coupons.services.pagination import build_page_meta
from coupons.services.query import StoreQuery
from coupons.settings import get_settings
from coupons.stores.redis import get_ui_payload_cache, set_ui_payload_cache

logger = logging.getLogger("uvicorn.error")

ResponseT = TypeVar("ResponseT", bound=BaseModel)


async def get_store_listing(query: StoreQuery) -> StoreListResponse:
    """Get one page of the global store listing.

    An unknown category slug is just a filter that matches nothing.
    """
    return await _cached(
        f"stores:{query.cache_key}",
        StoreListResponse,
        lambda: _build_store_listing(query, include_categories=True),
    )


async def get_category_listing(slug: str, query: StoreQuery) -> CategoryStoresResponse | None:
    """Get one page of stores in a category.

    Returns:
        CategoryStoresResponse, or None if the category does not exist.
    """
    category = await get_category_by_slug(slug)
    if category is None:
        return None

    scoped = StoreQuery(
        page=query.page,
        page_size=query.page_size,
        search=query.search,
        sort=query.sort,
        category_slug=category.slug,
    )

    async def build() -> CategoryStoresResponse:
        listing = await _build_store_listing(scoped)
        return CategoryStoresResponse(
            **listing.model_dump(),
            category=_category_ref(category),
        )

    return await _cached(f"category:{scoped.cache_key}", CategoryStoresResponse, build)


async def get_store_detail(
    slug: str,
    now: datetime | None = None,
) -> StoreDetailResponse | None:
    """Get the store page payload.

    Returns:
        StoreDetailResponse, or None if the store does not exist.
    """
    row = await get_store_by_slug(slug)
    if row is None:
        return None

    now = now or datetime.now(timezone.utc)
    store = row.store
    active, expired = split_deals(row.deals)

    return StoreDetailResponse(
        id=store.id,
        name=store.name,
        slug=store.slug,
        logo_url=store.logo_url,
        description=store.description,
        website_url=store.website_url,
        featured=store.featured,
        domains=list(store.domains or []),
        extension_enabled=store.extension_enabled,
        category=_category_ref(store.category),
        active_deal_count=len(active),
        active_deals=[_deal_view(deal, now) for deal in active],
        expired_deals=[_deal_view(deal, now) for deal in expired],
    )


async def get_categories_overview() -> CategoriesResponse:
    """Get all categories with store counts, plus the featured subset."""

    async def build() -> CategoriesResponse:
        rows = await list_categories()
        categories = [
            CategorySummary(
                id=row.category.id,
                name=row.category.name,
                slug=row.category.slug,
                icon=row.category.icon,
                featured=row.category.featured,
                store_count=row.store_count,
            )
            for row in rows
        ]
        return CategoriesResponse(
            categories=categories,
            featured=[c for c in categories if c.featured],
        )

    return await _cached("categories", CategoriesResponse, build)


async def _build_store_listing(
    query: StoreQuery,
    include_categories: bool = False,
) -> StoreListResponse:
    rows, total_count, category_rows = await asyncio.gather(
        list_stores(query),
        count_stores(query),
        list_categories() if include_categories else _no_categories(),
    )
    meta = build_page_meta(query.page, total_count, query.page_size)

    return StoreListResponse(
        stores=[_store_summary(row) for row in rows],
        total_count=meta.total_count,
        current_page=meta.current_page,
        total_pages=meta.total_pages,
        page_size=meta.page_size,
        has_previous=meta.has_previous,
        has_next=meta.has_next,
        filters=ListingFilters(
            search=query.search,
            sort=query.sort.value,
            category=query.category_slug,
        ),
        categories=[_category_ref(row.category) for row in category_rows],
    )


async def _no_categories() -> list[CategoryRow]:
    return []


def _category_ref(category: Category) -> CategoryRef:
    return CategoryRef(
        id=category.id,
        name=category.name,
        slug=category.slug,
        icon=category.icon,
    )


def _store_summary(row: StoreRow) -> StoreSummary:
    store = row.store
    return StoreSummary(
        id=store.id,
        name=store.name,
        slug=store.slug,
        logo_url=store.logo_url,
        description=store.description,
        featured=store.featured,
        category=_category_ref(store.category),
        active_deal_count=row.active_deal_count,
    )


def _deal_view(deal: Deal, now: datetime) -> DealView:
    days_left = days_until_expiration(deal.expiration_date, now=now)
    return DealView(
        id=deal.id,
        title=deal.title,
        description=deal.description,
        code=deal.code,
        type=deal.type.value,
        discount_percentage=deal.discount_percentage,
        discount_amount=str(deal.discount_amount) if deal.discount_amount is not None else None,
        discount_label=format_discount_label(
            deal.type,
            percentage=deal.discount_percentage,
            amount=deal.discount_amount,
        ),
        expiration_date=deal.expiration_date,
        days_left=days_left,
        # Expired deals never get the "Expiring Soon" badge.
        is_expiring_soon=not deal.is_expired and is_expiring_soon(days_left),
        is_expired=deal.is_expired,
        featured=deal.featured,
        usage_count=deal.usage_count,
    )


async def _cached(
    key: str,
    model: type[ResponseT],
    build: Callable[[], Awaitable[ResponseT]],
) -> ResponseT:
    """Serve a payload from the UI cache, building and storing it on a miss.

    If Redis is unavailable (e.g. tests / local minimal env), the payload is
    built from the database every time.
    """
    if not get_settings().ui_cache_enabled:
        return await build()

    try:
        cached = await get_ui_payload_cache(key)
    except RuntimeError:
        cached = None
    except RedisError as e:
        logger.warning(f"UI cache read failed for {key}: {e}")
        cached = None

    if cached is not None:
        return model.model_validate(cached)

    response = await build()

    try:
        await set_ui_payload_cache(key, response.model_dump(mode="json", by_alias=True))
    except RuntimeError:
        # Redis may be unavailable in tests/local minimal env.
        return response
    except RedisError as e:
        logger.warning(f"UI cache write failed for {key}: {e}")

    return response
