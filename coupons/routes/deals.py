"""Deal actions.

POST /v1/deals/{deal_id}/increment - Count a code copy / deal use.
"""

from fastapi import APIRouter, HTTPException, Path

from coupons.schemas import DealUsageResponse, ErrorResponse, error_body
from coupons.services.catalog import increment_deal_usage

router = APIRouter()


@router.post(
    "/{deal_id}/increment",
    response_model=DealUsageResponse,
    responses={404: {"model": ErrorResponse}},
)
async def increment_deal(
    deal_id: int = Path(description="Deal ID", ge=1),
) -> DealUsageResponse:
    """Increment the usage counter of a deal.

    Raises:
        HTTPException 404: If deal not found.
    """
    usage_count = await increment_deal_usage(deal_id)

    if usage_count is None:
        raise HTTPException(
            status_code=404,
            detail=error_body("DEAL_NOT_FOUND", f"Deal {deal_id} not found", {"deal_id": deal_id}),
        )

    return DealUsageResponse(deal_id=deal_id, usage_count=usage_count)
