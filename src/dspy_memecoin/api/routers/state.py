"""Router for exporting, importing and clearing the stored state."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from ...models.schemas.memes import ApiResponse
from ..dependencies import Services, get_services

router = APIRouter()


@router.get("/export", response_model=ApiResponse)
def export_state(services: Services = Depends(get_services)) -> ApiResponse:
    return ApiResponse(data=services.store.export_data())


@router.post("/import", response_model=ApiResponse)
def import_state(
    document: Dict[str, Any] = Body(...),
    services: Services = Depends(get_services),
) -> ApiResponse:
    """
    Restore collections from an export document.

    Returns:
        success=False when the document could not be imported
    """
    if not services.store.import_data(document):
        return ApiResponse(success=False, error="Failed to import data")
    return ApiResponse(data={"memes": len(services.store), "coins": len(services.store.coins())})


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_state(services: Services = Depends(get_services)) -> None:
    services.store.clear()
