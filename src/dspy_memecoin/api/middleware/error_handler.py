"""Exception handlers mapping domain errors to HTTP responses."""

from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ...exceptions.base import MemeCoinError, NotFoundError
from ...exceptions.meme_specific import (
    CoinAlreadyCreatedError,
    CoinDeploymentError,
    CoinEligibilityError,
    InvalidCoinRequestError,
    PromptValidationError,
)
from ...utils.logging import get_logger

logger = get_logger(__name__)

# Checked in order, so subclasses come before their bases.
STATUS_CODES: Dict[Type[MemeCoinError], int] = {
    PromptValidationError: 400,
    InvalidCoinRequestError: 422,
    NotFoundError: 404,
    CoinEligibilityError: 409,
    CoinAlreadyCreatedError: 409,
    CoinDeploymentError: 502,
}


def status_for(exc: MemeCoinError) -> int:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def memecoin_error_handler(request: Request, exc: MemeCoinError) -> JSONResponse:
    """Render a domain error as ``{success: false, error, details}``."""
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log("request_failed", path=request.url.path, status_code=status_code, code=exc.code.value)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": exc.message, "details": exc.to_dict()},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MemeCoinError, memecoin_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
