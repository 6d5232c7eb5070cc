"""Logging utilities."""

import logging
import sys
from typing import Any, ContextManager, Optional

import structlog
from structlog.processors import CallsiteParameter
from structlog.types import Processor

# Keys services bind for the duration of one operation.
CONTEXT_KEYS = ("meme_id", "session_id", "template_id", "chain_id")


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    log_file: Optional[str] = None
) -> None:
    """
    Set up structured logging.

    Context bound with :func:`bind_context` (meme id, batch session and so on)
    is merged into every event logged inside the block.

    Args:
        level: Log level
        json_format: Whether to output logs in JSON format
        log_file: Optional file to write logs to
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            [CallsiteParameter.MODULE, CallsiteParameter.FUNC_NAME, CallsiteParameter.LINENO],
            additional_ignores=[__name__],
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level.upper(),
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)


def bind_context(**values: Any) -> ContextManager[None]:
    """
    Bind key/values to every log event emitted inside the ``with`` block.

    None values are dropped so optional ids do not clutter the output.

    Raises:
        ValueError: On a key outside :data:`CONTEXT_KEYS`
    """
    unknown = set(values) - set(CONTEXT_KEYS)
    if unknown:
        raise ValueError(f"Unknown log context keys: {sorted(unknown)}")
    return structlog.contextvars.bound_contextvars(
        **{key: value for key, value in values.items() if value is not None}
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)
