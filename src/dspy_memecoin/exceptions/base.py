"""Base exceptions and error codes for the DSPy Meme Coin Creator."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for different types of errors."""

    # Validation Errors (1000-1999)
    PROMPT_VALIDATION_ERROR = "MEMECOIN-1000"
    COIN_REQUEST_VALIDATION_ERROR = "MEMECOIN-1001"

    # Lookup Errors (2000-2999)
    MEME_NOT_FOUND = "MEMECOIN-2000"
    TEMPLATE_NOT_FOUND = "MEMECOIN-2001"

    # Agent Errors (3000-3999)
    CLASSIFIER_ERROR = "MEMECOIN-3000"
    CAPTION_PARSE_ERROR = "MEMECOIN-3001"

    # Coin Errors (4000-4999)
    COIN_NOT_ELIGIBLE = "MEMECOIN-4000"
    COIN_ALREADY_CREATED = "MEMECOIN-4001"
    COIN_DEPLOYMENT_ERROR = "MEMECOIN-4002"
    IPFS_UPLOAD_ERROR = "MEMECOIN-4003"

    # Storage Errors (5000-5999)
    STORAGE_READ_ERROR = "MEMECOIN-5000"
    STORAGE_WRITE_ERROR = "MEMECOIN-5001"

    # General Errors (9000-9999)
    UNKNOWN_ERROR = "MEMECOIN-9000"


class MemeCoinError(Exception):
    """Base exception class for the DSPy Meme Coin Creator."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        """
        Initialize base exception.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            original_error: Original exception if this is a wrapped exception
        """
        self.message = message
        self.code = code
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary representation.

        Returns:
            Dictionary containing error details
        """
        error_dict = {
            "code": self.code.value,
            "message": self.message,
            "type": self.__class__.__name__,
        }

        if self.details:
            error_dict["details"] = self.details

        if self.original_error:
            error_dict["original_error"] = str(self.original_error)

        return error_dict


class ValidationError(MemeCoinError):
    """Base class for caller input errors."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.PROMPT_VALIDATION_ERROR, **kwargs: Any
    ) -> None:
        """Initialize validation error."""
        super().__init__(message, code, **kwargs)


class NotFoundError(MemeCoinError):
    """Base class for lookups of unknown ids."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.MEME_NOT_FOUND, **kwargs: Any
    ) -> None:
        """Initialize not-found error."""
        super().__init__(message, code, **kwargs)


class AgentError(MemeCoinError):
    """Base class for AI agent failures. These never escape the fallback paths."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.CLASSIFIER_ERROR, **kwargs: Any
    ) -> None:
        """Initialize agent error."""
        super().__init__(message, code, **kwargs)


class CoinError(MemeCoinError):
    """Base class for coin creation errors."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.COIN_NOT_ELIGIBLE, **kwargs: Any
    ) -> None:
        """Initialize coin error."""
        super().__init__(message, code, **kwargs)


class StorageError(MemeCoinError):
    """Raised by the local state backend. Always swallowed by the persistence layer."""

    def __init__(
        self, message: str, code: ErrorCode = ErrorCode.STORAGE_WRITE_ERROR, **kwargs: Any
    ) -> None:
        """Initialize storage error."""
        super().__init__(message, code, **kwargs)
