"""Schemas for the catalog UI endpoints (/v1/ui/stores, /v1/ui/categories)."""

from datetime import datetime

from pydantic import BaseModel, Field


class CategoryRef(BaseModel):
    """Category as embedded in store payloads."""

    id: int
    name: str
    slug: str
    icon: str | None = None


class CategorySummary(CategoryRef):
    """Category card on the categories page."""

    featured: bool
    store_count: int = Field(alias="storeCount", ge=0)

    model_config = {"populate_by_name": True}


class CategoriesResponse(BaseModel):
    """Response payload for GET /v1/ui/categories."""

    categories: list[CategorySummary]
    featured: list[CategorySummary]


class StoreSummary(BaseModel):
    """Store card in a listing."""

    id: int
    name: str
    slug: str
    logo_url: str = Field(alias="logoUrl")
    description: str
    featured: bool
    category: CategoryRef
    active_deal_count: int = Field(alias="activeDealCount", ge=0)

    model_config = {"populate_by_name": True}


class ListingFilters(BaseModel):
    """Normalized filters echoed back for building pagination links."""

    search: str
    sort: str
    category: str | None = None


class StoreListResponse(BaseModel):
    """Response payload for GET /v1/ui/stores."""

    stores: list[StoreSummary]
    total_count: int = Field(alias="totalCount", ge=0)
    current_page: int = Field(alias="currentPage", ge=1)
    total_pages: int = Field(alias="totalPages", ge=0)
    page_size: int = Field(alias="pageSize", ge=1)
    has_previous: bool = Field(alias="hasPrevious")
    has_next: bool = Field(alias="hasNext")
    filters: ListingFilters
    # Filter dropdown options, ordered by name (global listing only)
    categories: list[CategoryRef] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class CategoryStoresResponse(StoreListResponse):
    """Response payload for GET /v1/ui/categories/{slug}."""

    category: CategoryRef


class DealView(BaseModel):
    """A deal on the store page, with display-ready values."""

    id: int
    title: str
    description: str
    code: str | None = None
    type: str
    discount_percentage: int | None = Field(alias="discountPercentage", default=None)
    discount_amount: str | None = Field(alias="discountAmount", default=None)
    discount_label: str = Field(alias="discountLabel")
    expiration_date: datetime | None = Field(alias="expirationDate", default=None)
    days_left: int | None = Field(alias="daysLeft", default=None)
    is_expiring_soon: bool = Field(alias="isExpiringSoon", default=False)
    is_expired: bool = Field(alias="isExpired")
    featured: bool
    usage_count: int = Field(alias="usageCount", ge=0)

    model_config = {"populate_by_name": True}


class StoreDetailResponse(BaseModel):
    """Response payload for GET /v1/ui/stores/{slug}."""

    id: int
    name: str
    slug: str
    logo_url: str = Field(alias="logoUrl")
    description: str
    website_url: str = Field(alias="websiteUrl")
    featured: bool
    domains: list[str] = Field(default_factory=list)
    extension_enabled: bool = Field(alias="extensionEnabled", default=False)
    category: CategoryRef
    active_deal_count: int = Field(alias="activeDealCount", ge=0)
    active_deals: list[DealView] = Field(alias="activeDeals", default_factory=list)
    expired_deals: list[DealView] = Field(alias="expiredDeals", default_factory=list)

    model_config = {"populate_by_name": True}


class DealUsageResponse(BaseModel):
    """Response payload for POST /v1/deals/{deal_id}/increment."""

    ok: bool = True
    deal_id: int = Field(alias="dealId")
    usage_count: int = Field(alias="usageCount", ge=0)

    model_config = {"populate_by_name": True}
