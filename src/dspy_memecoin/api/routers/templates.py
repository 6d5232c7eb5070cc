"""Router for the template catalog."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...models.schemas.memes import ApiResponse
from ..dependencies import Services, get_services

router = APIRouter()


@router.get("", response_model=ApiResponse)
def list_templates(
    category: Optional[str] = Query(None, description="Exact category tag"),
    services: Services = Depends(get_services),
) -> ApiResponse:
    catalog = services.catalog
    templates = catalog.by_category(category) if category else catalog.all()
    return ApiResponse(data=[template.to_dict() for template in templates])


@router.get("/categories", response_model=ApiResponse)
def list_categories(services: Services = Depends(get_services)) -> ApiResponse:
    return ApiResponse(data=services.catalog.categories())


@router.get("/{template_id}", response_model=ApiResponse)
def get_template(template_id: str, services: Services = Depends(get_services)) -> ApiResponse:
    return ApiResponse(data=services.catalog.require(template_id).to_dict())
