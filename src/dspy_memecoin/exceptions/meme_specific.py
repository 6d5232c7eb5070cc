"""Domain-specific exceptions for meme generation and coin creation."""

from typing import Any, List, Optional

from .base import AgentError, CoinError, ErrorCode, NotFoundError, ValidationError


class PromptValidationError(ValidationError):
    """Raised when a generation request carries an empty prompt."""

    def __init__(self, message: str = "Prompt is required", **kwargs: Any) -> None:
        """Initialize prompt validation error."""
        super().__init__(message, ErrorCode.PROMPT_VALIDATION_ERROR, **kwargs)


class InvalidCoinRequestError(ValidationError):
    """Raised when a coin request has a malformed name, symbol or address."""

    def __init__(self, message: str, field: str, **kwargs: Any) -> None:
        """Initialize invalid coin request error."""
        details = {"field": field}
        super().__init__(
            message, ErrorCode.COIN_REQUEST_VALIDATION_ERROR, details=details, **kwargs
        )


class MemeNotFoundError(NotFoundError):
    """Raised when a meme id is not in the store."""

    def __init__(self, meme_id: str, **kwargs: Any) -> None:
        """Initialize meme not found error."""
        super().__init__(
            f"Meme not found: {meme_id}",
            ErrorCode.MEME_NOT_FOUND,
            details={"meme_id": meme_id},
            **kwargs,
        )


class TemplateNotFoundError(NotFoundError):
    """Raised when a template id is not in the catalog."""

    def __init__(self, template_id: str, **kwargs: Any) -> None:
        """Initialize template not found error."""
        super().__init__(
            f"Template not found: {template_id}",
            ErrorCode.TEMPLATE_NOT_FOUND,
            details={"template_id": template_id},
            **kwargs,
        )


class ClassifierError(AgentError):
    """Raised when the template classifier cannot produce an answer."""

    def __init__(self, message: str, candidates: Optional[List[str]] = None, **kwargs: Any) -> None:
        """Initialize classifier error."""
        details = {"candidates": candidates or []}
        super().__init__(message, ErrorCode.CLASSIFIER_ERROR, details=details, **kwargs)


class CaptionParseError(AgentError):
    """Raised when a caption response holds no usable topText/bottomText mapping."""

    def __init__(self, message: str, raw_response: Optional[str] = None, **kwargs: Any) -> None:
        """Initialize caption parse error."""
        details = {"raw_response": raw_response}
        super().__init__(message, ErrorCode.CAPTION_PARSE_ERROR, details=details, **kwargs)


class CoinEligibilityError(CoinError):
    """Raised when a coin is requested for a meme below the popularity thresholds."""

    def __init__(self, meme_id: str, score: int, **kwargs: Any) -> None:
        """Initialize coin eligibility error."""
        super().__init__(
            f"Meme {meme_id} is not eligible for coin creation",
            ErrorCode.COIN_NOT_ELIGIBLE,
            details={"meme_id": meme_id, "score": score},
            **kwargs,
        )


class CoinAlreadyCreatedError(CoinError):
    """Raised when a coin is requested for a meme that already has one."""

    def __init__(self, meme_id: str, coin_address: Optional[str] = None, **kwargs: Any) -> None:
        """Initialize coin already created error."""
        super().__init__(
            f"A coin was already created for meme {meme_id}",
            ErrorCode.COIN_ALREADY_CREATED,
            details={"meme_id": meme_id, "coin_address": coin_address},
            **kwargs,
        )


class CoinDeploymentError(CoinError):
    """Raised by the IPFS or chain boundary when deployment fails."""

    def __init__(
        self,
        message: str,
        stage: str,
        code: ErrorCode = ErrorCode.COIN_DEPLOYMENT_ERROR,
        **kwargs: Any,
    ) -> None:
        """Initialize coin deployment error."""
        details = kwargs.pop("details", {})
        details["stage"] = stage
        super().__init__(message, code, details=details, **kwargs)
