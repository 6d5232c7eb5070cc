"""Language model configuration shared by the agents."""

import dspy

from ..config.config import settings
from ..utils.logging import get_logger

logger = get_logger(__name__)


def ensure_dspy_configured() -> bool:
    """Ensure DSPy is configured with a language model.

    Returns:
        bool: True if a language model is available, False otherwise.
    """
    if dspy.settings.lm is not None:
        return True

    if not settings.openai_api_key:
        logger.warning("dspy_not_configured", reason="OPENAI_API_KEY is not set")
        return False

    try:
        logger.info("configuring_dspy", model=settings.dspy_model)
        lm = dspy.LM(
            f"openai/{settings.dspy_model}",
            api_key=settings.openai_api_key,
            max_tokens=settings.dspy_max_tokens,
        )
        dspy.configure(lm=lm)
        return True
    except Exception as e:
        logger.error("dspy_configuration_failed", error=str(e), exc_info=True)
        return False
