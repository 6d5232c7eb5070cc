"""Router for user preferences."""

from fastapi import APIRouter, Depends

from ...models.schemas.coins import PreferencesUpdate
from ...models.schemas.memes import ApiResponse
from ..dependencies import Services, get_services

router = APIRouter()


@router.get("", response_model=ApiResponse)
def get_preferences(services: Services = Depends(get_services)) -> ApiResponse:
    return ApiResponse(data=services.store.preferences.dump())


@router.put("", response_model=ApiResponse)
def update_preferences(
    update: PreferencesUpdate,
    services: Services = Depends(get_services),
) -> ApiResponse:
    changes = update.model_dump(exclude_none=True)
    return ApiResponse(data=services.store.update_preferences(**changes).dump())
