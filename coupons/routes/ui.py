"""UI bootstrap endpoints.

GET /v1/ui/stores              - Store listing (search, category, sort, page)
GET /v1/ui/stores/{slug}       - Store page with active / expired deals
GET /v1/ui/categories          - All categories + featured subset
GET /v1/ui/categories/{slug}   - Stores in one category

Query parameters are raw strings: malformed page/sort values fall back to
defaults instead of failing validation.

Routers are thin: call services for business logic.
"""

from fastapi import APIRouter, HTTPException, Path, Query

from coupons.schemas import (
    CategoriesResponse,
    CategoryStoresResponse,
    ErrorResponse,
    StoreDetailResponse,
    StoreListResponse,
    error_body,
)
from coupons.services.listing import (
    get_categories_overview,
    get_category_listing,
    get_store_detail,
    get_store_listing,
)
from coupons.services.query import (
    CATEGORY_STORES_PAGE_SIZE,
    STORES_PAGE_SIZE,
    normalize_store_query,
)

router = APIRouter()


def _not_found(code: str, message: str, detail: dict) -> HTTPException:
    return HTTPException(status_code=404, detail=error_body(code, message, detail))


@router.get("/stores", response_model=StoreListResponse)
async def list_stores_page(
    page: str | None = Query(default=None, description="Page number (1-based)", examples=["1"]),
    search: str | None = Query(default=None, description="Case-insensitive store name filter"),
    category: str | None = Query(default=None, description="Category slug", examples=["electronics"]),
    sort: str | None = Query(default=None, description="'name' (A-Z) or 'deals' (most deals)"),
) -> StoreListResponse:
    """Get one page of all stores.

    Returns:
        StoreListResponse with stores (<=20) and pagination metadata.
    """
    query = normalize_store_query(
        page=page,
        search=search,
        sort=sort,
        category=category,
        page_size=STORES_PAGE_SIZE,
    )
    return await get_store_listing(query)


@router.get(
    "/stores/{slug}",
    response_model=StoreDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_store_page(
    slug: str = Path(description="Store slug", min_length=1),
) -> StoreDetailResponse:
    """Get store page data.

    Raises:
        HTTPException 404: If store not found.
    """
    store = await get_store_detail(slug)
    if store is None:
        raise _not_found("STORE_NOT_FOUND", f"Store {slug} not found", {"slug": slug})
    return store


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories_page() -> CategoriesResponse:
    """Get all categories with store counts."""
    return await get_categories_overview()


@router.get(
    "/categories/{slug}",
    response_model=CategoryStoresResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_category_page(
    slug: str = Path(description="Category slug", min_length=1),
    page: str | None = Query(default=None, description="Page number (1-based)"),
    search: str | None = Query(default=None, description="Case-insensitive store name filter"),
    sort: str | None = Query(default=None, description="'name' (A-Z) or 'deals' (most deals)"),
) -> CategoryStoresResponse:
    """Get one page of stores in a category.

    Raises:
        HTTPException 404: If category not found.
    """
    query = normalize_store_query(
        page=page,
        search=search,
        sort=sort,
        page_size=CATEGORY_STORES_PAGE_SIZE,
    )
    listing = await get_category_listing(slug, query)
    if listing is None:
        raise _not_found("CATEGORY_NOT_FOUND", f"Category {slug} not found", {"slug": slug})
    return listing
