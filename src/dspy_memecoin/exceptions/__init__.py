"""Exceptions for the DSPy Meme Coin Creator."""

from .base import (
    AgentError,
    CoinError,
    ErrorCode,
    MemeCoinError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from .meme_specific import (
    CaptionParseError,
    ClassifierError,
    CoinAlreadyCreatedError,
    CoinDeploymentError,
    CoinEligibilityError,
    InvalidCoinRequestError,
    MemeNotFoundError,
    PromptValidationError,
    TemplateNotFoundError,
)

__all__ = [
    "AgentError",
    "CaptionParseError",
    "ClassifierError",
    "CoinAlreadyCreatedError",
    "CoinDeploymentError",
    "CoinEligibilityError",
    "CoinError",
    "ErrorCode",
    "InvalidCoinRequestError",
    "MemeCoinError",
    "MemeNotFoundError",
    "NotFoundError",
    "PromptValidationError",
    "StorageError",
    "TemplateNotFoundError",
    "ValidationError",
]
