"""Router for engagement analytics."""

from fastapi import APIRouter, Depends

from ...models.schemas.memes import ApiResponse
from ...services.eligibility import COIN_ELIGIBILITY_THRESHOLDS, ENGAGEMENT_WEIGHTS
from ..dependencies import Services, get_services

router = APIRouter()


@router.get("/trends", response_model=ApiResponse)
def engagement_trends(services: Services = Depends(get_services)) -> ApiResponse:
    """
    Aggregate engagement across all memes.

    Returns:
        Totals, category breakdown and the last 24 hours of activity
    """
    return ApiResponse(data=services.store.engagement_trends())


@router.get("/thresholds", response_model=ApiResponse)
def eligibility_thresholds() -> ApiResponse:
    return ApiResponse(data={"weights": ENGAGEMENT_WEIGHTS, "thresholds": COIN_ELIGIBILITY_THRESHOLDS})
