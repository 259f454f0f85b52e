"""Tests for catalog page payloads (repository and cache calls patched, no DB/Redis)."""

from dataclasses import replace
import logging
from types import SimpleNamespace

import pytest
from redis.exceptions import RedisError

from coupons.models import Category, Deal, Store
from coupons.services import catalog as catalog_repo
from coupons.services import listing
from coupons.services.catalog import CategoryRow, StoreDetailRow, StoreRow
from coupons.services.query import CATEGORY_STORES_PAGE_SIZE, StoreQuery, normalize_store_query

from tests.factories import NOW, make_category, make_store


class FakeCatalog:
    """In-memory stand-in for the catalog repository functions."""

    def __init__(self, stores: list[StoreRow], categories: list[Category] | None = None) -> None:
        self.stores = stores
        self.categories = categories or []
        self.queries: list[StoreQuery] = []

    def _matching(self, query: StoreQuery) -> list[StoreRow]:
        rows = self.stores
        if query.search:
            rows = [r for r in rows if query.search.lower() in r.store.name.lower()]
        if query.category_slug:
            rows = [r for r in rows if r.store.category.slug == query.category_slug]
        return rows

    async def list_stores(self, query: StoreQuery) -> list[StoreRow]:
        self.queries.append(query)
        rows = self._matching(query)
        return rows[query.offset : query.offset + query.page_size]

    async def count_stores(self, query: StoreQuery) -> int:
        return len(self._matching(query))

    async def get_category_by_slug(self, slug: str) -> Category | None:
        return next((c for c in self.categories if c.slug == slug), None)

    async def list_categories(self) -> list[CategoryRow]:
        return [
            CategoryRow(category=c, store_count=sum(r.store.category is c for r in self.stores))
            for c in sorted(self.categories, key=lambda c: c.name)
        ]


@pytest.fixture
def catalog(monkeypatch: pytest.MonkeyPatch, electronics: Category) -> FakeCatalog:
    fashion = make_category(id=2, slug="fashion-apparel", featured=False)
    names = ["Adidas", "Amazon", "Best Buy", "H&M", "Newegg", "Nike", "Zara"]
    rows = []
    for i, name in enumerate(names, start=1):
        category = electronics if name in ("Amazon", "Best Buy", "Newegg") else fashion
        rows.append(StoreRow(store=make_store(i, name, category), active_deal_count=i % 3))

    fake = FakeCatalog(rows, categories=[electronics, fashion])
    monkeypatch.setattr(listing, "list_stores", fake.list_stores)
    monkeypatch.setattr(listing, "count_stores", fake.count_stores)
    monkeypatch.setattr(listing, "get_category_by_slug", fake.get_category_by_slug)
    monkeypatch.setattr(listing, "list_categories", fake.list_categories)
    return fake


@pytest.mark.asyncio
async def test_store_listing_pagination_metadata(catalog: FakeCatalog) -> None:
    query = StoreQuery(page=2, page_size=3)
    response = await listing.get_store_listing(query)

    assert [s.name for s in response.stores] == ["H&M", "Newegg", "Nike"]
    assert response.total_count == 7
    assert response.total_pages == 3
    assert response.current_page == 2
    assert response.page_size == 3
    assert response.has_previous is True
    assert response.has_next is True


@pytest.mark.asyncio
async def test_store_listing_empty_search_matches_omitted_search(catalog: FakeCatalog) -> None:
    with_empty = await listing.get_store_listing(normalize_store_query(search=""))
    omitted = await listing.get_store_listing(normalize_store_query())
    assert with_empty == omitted
    assert with_empty.total_count == 7


@pytest.mark.asyncio
async def test_store_listing_out_of_range_page_is_empty(catalog: FakeCatalog) -> None:
    response = await listing.get_store_listing(normalize_store_query(page="9"))
    assert response.stores == []
    assert response.total_count == 7
    assert response.total_pages == 1
    assert response.has_next is False
    assert response.has_previous is True


@pytest.mark.asyncio
async def test_store_listing_serializes_camel_case(catalog: FakeCatalog) -> None:
    response = await listing.get_store_listing(normalize_store_query(search="best"))
    data = response.model_dump(by_alias=True)
    assert data["totalCount"] == 1
    assert data["stores"][0]["activeDealCount"] == 0
    assert data["stores"][0]["category"]["slug"] == "electronics"
    assert data["filters"] == {"search": "best", "sort": "name", "category": None}


@pytest.mark.asyncio
async def test_category_listing_not_found(catalog: FakeCatalog) -> None:
    query = normalize_store_query(page_size=CATEGORY_STORES_PAGE_SIZE)
    assert await listing.get_category_listing("does-not-exist", query) is None
    assert catalog.queries == []


@pytest.mark.asyncio
async def test_category_listing_is_scoped(catalog: FakeCatalog) -> None:
    query = normalize_store_query(page_size=CATEGORY_STORES_PAGE_SIZE)
    response = await listing.get_category_listing("electronics", query)

    assert response is not None
    assert response.category.slug == "electronics"
    assert [s.name for s in response.stores] == ["Amazon", "Best Buy", "Newegg"]
    assert response.page_size == 12
    assert catalog.queries[-1].category_slug == "electronics"


@pytest.mark.asyncio
async def test_listing_fails_when_a_read_fails(catalog: FakeCatalog, monkeypatch: pytest.MonkeyPatch) -> None:
    async def broken_count(query: StoreQuery) -> int:
        raise ConnectionError("database unavailable")

    monkeypatch.setattr(listing, "count_stores", broken_count)

    with pytest.raises(ConnectionError):
        await listing.get_store_listing(normalize_store_query())


@pytest.mark.asyncio
async def test_store_detail_splits_deals_by_flag(
    monkeypatch: pytest.MonkeyPatch,
    best_buy: Store,
    best_buy_deals: list[Deal],
) -> None:
    async def fake_get_store_by_slug(slug: str) -> StoreDetailRow | None:
        if slug == best_buy.slug:
            return StoreDetailRow(store=best_buy, deals=best_buy_deals)
        return None

    monkeypatch.setattr(listing, "get_store_by_slug", fake_get_store_by_slug)

    detail = await listing.get_store_detail("best-buy", now=NOW)

    assert detail is not None
    assert detail.active_deal_count == 3
    assert [d.id for d in detail.active_deals] == [1, 2, 4]
    assert [d.id for d in detail.expired_deals] == [3]

    laptop, tv, shipping = detail.active_deals
    assert laptop.discount_label == "100 OFF"
    assert laptop.discount_amount == "100.00"
    assert laptop.days_left == 2
    assert laptop.is_expiring_soon is True
    assert tv.discount_label == "15% OFF"
    assert tv.usage_count == 7
    assert tv.is_expiring_soon is False
    # Past date but not flagged expired: stays active, no badge
    assert shipping.discount_label == "FREE SHIPPING"
    assert shipping.days_left == -1
    assert shipping.is_expiring_soon is False

    expired = detail.expired_deals[0]
    assert expired.discount_label == "50% OFF"
    assert expired.days_left == -10
    assert expired.is_expired is True

    assert await listing.get_store_detail("unknown", now=NOW) is None


@pytest.mark.asyncio
async def test_categories_overview_featured_subset(monkeypatch: pytest.MonkeyPatch) -> None:
    electronics = make_category(id=1, slug="electronics", featured=True)
    travel = make_category(id=2, slug="travel-hotels", featured=False)

    async def fake_list_categories() -> list[CategoryRow]:
        return [
            CategoryRow(category=electronics, store_count=3),
            CategoryRow(category=travel, store_count=0),
        ]

    monkeypatch.setattr(listing, "list_categories", fake_list_categories)

    overview = await listing.get_categories_overview()

    assert [c.slug for c in overview.categories] == ["electronics", "travel-hotels"]
    assert [c.slug for c in overview.featured] == ["electronics"]
    assert overview.categories[0].store_count == 3
    assert overview.categories[1].store_count == 0


@pytest.mark.asyncio
async def test_store_listing_includes_categories_for_filter(catalog: FakeCatalog) -> None:
    response = await listing.get_store_listing(normalize_store_query())
    assert [c.slug for c in response.categories] == ["electronics", "fashion-apparel"]

    scoped = await listing.get_category_listing(
        "electronics", normalize_store_query(page_size=CATEGORY_STORES_PAGE_SIZE)
    )
    assert scoped is not None
    assert scoped.categories == []


@pytest.mark.asyncio
async def test_store_listing_page_beyond_sql_offset_range(
    catalog: FakeCatalog,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def no_session():
        raise AssertionError("list_stores must not open a session for this page")

    monkeypatch.setattr(catalog_repo, "get_session", no_session)
    monkeypatch.setattr(listing, "list_stores", catalog_repo.list_stores)

    query = normalize_store_query(page="100000000000000000000")
    assert query.offset > catalog_repo.MAX_SQL_OFFSET

    response = await listing.get_store_listing(query)

    assert response.stores == []
    assert response.current_page == 10**20
    assert response.total_count == 7
    assert response.total_pages == 1
    assert response.has_previous is True
    assert response.has_next is False


# ============================================================
# Page payload cache
# ============================================================


class FakeCache:
    """In-memory stand-in for the Redis UI payload cache."""

    def __init__(self) -> None:
        self.data: dict[str, dict] = {}
        self.reads: list[str] = []
        self.writes: list[str] = []

    async def get(self, key: str) -> dict | None:
        self.reads.append(key)
        return self.data.get(key)

    async def set(self, key: str, payload: dict) -> None:
        self.writes.append(key)
        self.data[key] = payload


@pytest.fixture
def cache(monkeypatch: pytest.MonkeyPatch) -> FakeCache:
    fake = FakeCache()
    monkeypatch.setattr(listing, "get_ui_payload_cache", fake.get)
    monkeypatch.setattr(listing, "set_ui_payload_cache", fake.set)
    monkeypatch.setattr(listing, "get_settings", lambda: SimpleNamespace(ui_cache_enabled=True))
    return fake


@pytest.mark.asyncio
async def test_cache_miss_stores_then_hit_skips_repository(catalog: FakeCatalog, cache: FakeCache) -> None:
    query = normalize_store_query(page_size=CATEGORY_STORES_PAGE_SIZE)
    key = f"category:{replace(query, category_slug='electronics').cache_key}"

    first = await listing.get_category_listing("electronics", query)
    second = await listing.get_category_listing("electronics", query)

    assert cache.writes == [key]
    assert cache.data[key]["totalCount"] == 3
    assert cache.data[key]["category"]["slug"] == "electronics"
    assert len(catalog.queries) == 1
    assert isinstance(second, listing.CategoryStoresResponse)
    assert second == first


@pytest.mark.asyncio
async def test_cached_payload_echoes_request_search(catalog: FakeCatalog, cache: FakeCache) -> None:
    upper = await listing.get_store_listing(normalize_store_query(search="Best"))
    lower = await listing.get_store_listing(normalize_store_query(search="best"))

    assert upper.filters.search == "Best"
    assert lower.filters.search == "best"
    assert len(cache.writes) == 2


@pytest.mark.asyncio
async def test_cache_read_error_falls_back_to_repository(
    catalog: FakeCatalog,
    cache: FakeCache,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    async def broken_get(key: str) -> dict | None:
        raise RedisError("connection reset")

    monkeypatch.setattr(listing, "get_ui_payload_cache", broken_get)

    with caplog.at_level(logging.WARNING, logger="uvicorn.error"):
        response = await listing.get_store_listing(normalize_store_query())

    assert response.total_count == 7
    assert len(catalog.queries) == 1
    assert len(cache.writes) == 1
    assert "UI cache read failed" in caplog.text


@pytest.mark.asyncio
async def test_cache_write_error_still_serves(
    catalog: FakeCatalog,
    cache: FakeCache,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    async def broken_set(key: str, payload: dict) -> None:
        raise RedisError("read only replica")

    monkeypatch.setattr(listing, "set_ui_payload_cache", broken_set)

    with caplog.at_level(logging.WARNING, logger="uvicorn.error"):
        response = await listing.get_store_listing(normalize_store_query(page="2", sort="deals"))

    assert response.current_page == 2
    assert cache.reads
    assert "UI cache write failed" in caplog.text


@pytest.mark.asyncio
async def test_cache_skipped_when_redis_not_initialized(
    catalog: FakeCatalog,
    cache: FakeCache,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def not_initialized(*args) -> None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")

    monkeypatch.setattr(listing, "get_ui_payload_cache", not_initialized)
    monkeypatch.setattr(listing, "set_ui_payload_cache", not_initialized)

    first = await listing.get_store_listing(normalize_store_query())
    second = await listing.get_store_listing(normalize_store_query())

    assert first == second
    assert len(catalog.queries) == 2


@pytest.mark.asyncio
async def test_cache_disabled_makes_no_cache_calls(
    catalog: FakeCatalog,
    cache: FakeCache,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(listing, "get_settings", lambda: SimpleNamespace(ui_cache_enabled=False))

    await listing.get_store_listing(normalize_store_query())
    await listing.get_categories_overview()

    assert cache.reads == []
    assert cache.writes == []
