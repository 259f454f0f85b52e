"""Pydantic schemas for API request/response validation."""

from coupons.schemas.common import ErrorDetail, ErrorResponse, error_body
from coupons.schemas.catalog import (
    CategoriesResponse,
    CategoryRef,
    CategoryStoresResponse,
    CategorySummary,
    DealUsageResponse,
    DealView,
    ListingFilters,
    StoreDetailResponse,
    StoreListResponse,
    StoreSummary,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "error_body",
    "CategoriesResponse",
    "CategoryRef",
    "CategoryStoresResponse",
    "CategorySummary",
    "DealUsageResponse",
    "DealView",
    "ListingFilters",
    "StoreDetailResponse",
    "StoreListResponse",
    "StoreSummary",
]
