"""Pydantic schemas for meme endpoints."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    """Accepts and emits camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelSchema):
    """
    Envelope for every API response.

    Attributes:
        success: Whether the call succeeded
        data: Payload on success
        error: Reason on failure
    """

    success: bool = True
    data: Optional[Any] = None
    error: Optional[str] = None


class MemeGenerationRequest(CamelSchema):
    """
    Schema for meme generation request.

    Attributes:
        prompt: What the meme should be about (required, checked by the service)
        category: Optional template category, ``All`` for none
        language: Caption language
        reset_templates: Clear the session's used templates before selecting
        batch_index: Position in a deterministic batch
        session_id: Batch session the template usage belongs to
    """

    prompt: Optional[str] = Field(None, description="The meme prompt")
    category: Optional[str] = Field(None, description="Template category filter")
    language: str = Field("en", description="Caption language")
    reset_templates: bool = Field(False, description="Reset template usage before selection")
    batch_index: Optional[int] = Field(None, ge=0, description="Index within a deterministic batch")
    session_id: Optional[str] = Field(None, max_length=128, description="Batch session id")


class GeneratedMeme(CamelSchema):
    """Payload returned from a generation call."""

    id: str
    template_id: str
    template_name: str
    image_url: str
    top_text: Optional[str] = None
    bottom_text: Optional[str] = None
    prompt: str


class EngagementRequest(CamelSchema):
    """Body of an engagement call. Both fields are optional."""

    amount: int = Field(1, ge=0, description="Increment")
    platform: Optional[str] = Field(None, max_length=64, description="Share platform")


class TrackEventRequest(CamelSchema):
    action: str = Field(..., min_length=1, max_length=64)
    metadata: Dict[str, Any] = Field(default_factory=dict)


class MemeListResponse(CamelSchema):
    items: List[Dict[str, Any]]
    total: int
