"""API routes."""

from fastapi import APIRouter

from coupons.routes import deals, ui

api_router = APIRouter()

# UI endpoints (catalog pages)
api_router.include_router(ui.router, prefix="/v1/ui", tags=["ui"])

# Deal actions (usage counter)
api_router.include_router(deals.router, prefix="/v1/deals", tags=["deals"])
