"""Router for meme generation and engagement endpoints."""

from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ...exceptions.meme_specific import MemeNotFoundError
from ...models.schemas.memes import (
    ApiResponse,
    EngagementRequest,
    GeneratedMeme,
    MemeGenerationRequest,
    MemeListResponse,
    TrackEventRequest,
)
from ..dependencies import Services, get_services

router = APIRouter()

EngagementAction = Literal["view", "like", "share", "download", "comment"]


def _listing(memes) -> Dict[str, Any]:
    items = [meme.to_dict() for meme in memes]
    return MemeListResponse(items=items, total=len(items)).model_dump(by_alias=True)


@router.post("/generate", response_model=ApiResponse)
def generate_meme(
    request: MemeGenerationRequest,
    services: Services = Depends(get_services),
) -> ApiResponse:
    """
    Generate a meme for a prompt.

    Args:
        request: Prompt, filters and batch controls
        services: Wired services

    Returns:
        The generated meme in the response envelope
    """
    meme = services.generator.generate(
        request.prompt or "",
        category=request.category,
        language=request.language,
        reset_templates=request.reset_templates,
        batch_index=request.batch_index,
        session_id=request.session_id,
    )
    data = GeneratedMeme(
        id=meme.id,
        template_id=meme.template_id,
        template_name=meme.template_name,
        image_url=meme.image_url,
        top_text=meme.top_text,
        bottom_text=meme.bottom_text,
        prompt=meme.prompt,
    )
    return ApiResponse(data=data.model_dump(by_alias=True))


@router.get("", response_model=ApiResponse)
def list_memes(
    category: Optional[str] = Query(None, description="Case-insensitive category filter"),
    services: Services = Depends(get_services),
) -> ApiResponse:
    store = services.store
    memes = store.memes_by_category(category) if category else store.all()
    return ApiResponse(data=_listing(memes))


@router.get("/top", response_model=ApiResponse)
def top_memes(
    limit: int = Query(10, ge=1, le=100),
    services: Services = Depends(get_services),
) -> ApiResponse:
    return ApiResponse(data=_listing(services.store.top_memes(limit)))


@router.get("/eligible", response_model=ApiResponse)
def eligible_memes(services: Services = Depends(get_services)) -> ApiResponse:
    return ApiResponse(data=_listing(services.store.eligible_memes()))


@router.get("/trending", response_model=ApiResponse)
def trending_memes(
    timeframe: Literal["hour", "day", "week"] = Query("day"),
    services: Services = Depends(get_services),
) -> ApiResponse:
    return ApiResponse(data=_listing(services.store.trending_memes(timeframe)))


@router.get("/{meme_id}", response_model=ApiResponse)
def get_meme(meme_id: str, services: Services = Depends(get_services)) -> ApiResponse:
    return ApiResponse(data=services.store.require(meme_id).to_dict())


@router.delete("/{meme_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meme(meme_id: str, services: Services = Depends(get_services)) -> None:
    if not services.store.remove(meme_id):
        raise MemeNotFoundError(meme_id)


@router.post("/{meme_id}/engagement/{action}", response_model=ApiResponse)
def track_engagement(
    meme_id: str,
    action: EngagementAction,
    request: Optional[EngagementRequest] = Body(None),
    services: Services = Depends(get_services),
) -> ApiResponse:
    """
    Increment one engagement counter.

    Args:
        meme_id: Meme to update
        action: Counter to increment
        request: Optional amount and share platform
        services: Wired services

    Returns:
        The updated meme
    """
    request = request or EngagementRequest()
    tracker = services.tracker
    if action == "share":
        meme = tracker.increment_shares(meme_id, platform=request.platform, amount=request.amount)
    else:
        meme = tracker.increment(meme_id, action, amount=request.amount)
    if meme is None:
        raise MemeNotFoundError(meme_id)
    return ApiResponse(data=meme.to_dict())


@router.post("/{meme_id}/events", response_model=ApiResponse)
def track_event(
    meme_id: str,
    request: TrackEventRequest,
    services: Services = Depends(get_services),
) -> ApiResponse:
    event = services.tracker.track_engagement(meme_id, request.action, request.metadata)
    if event is None:
        raise MemeNotFoundError(meme_id)
    return ApiResponse(data=event.to_dict())


@router.post("/{meme_id}/simulate-viral", response_model=ApiResponse)
def simulate_viral(meme_id: str, services: Services = Depends(get_services)) -> ApiResponse:
    meme = services.tracker.simulate_viral_growth(meme_id)
    if meme is None:
        raise MemeNotFoundError(meme_id)
    return ApiResponse(data=meme.to_dict())


@router.get("/{meme_id}/history", response_model=ApiResponse)
def engagement_history(meme_id: str, services: Services = Depends(get_services)) -> ApiResponse:
    services.store.require(meme_id)
    history = services.tracker.get_engagement_history(meme_id)
    return ApiResponse(data=[event.to_dict() for event in history])
