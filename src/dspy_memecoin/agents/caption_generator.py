"""Caption generation agent with a rule-based fallback."""

import json
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import dspy

from ..config.config import settings
from ..exceptions.meme_specific import CaptionParseError
from ..models.template import MemeTemplate
from ..utils.logging import get_logger

logger = get_logger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class GenerateCaptionsSignature(dspy.Signature):
    """Generate short, punchy top and bottom captions for a meme template."""

    prompt: str = dspy.InputField(desc="What the meme should be about")
    template_name: str = dspy.InputField(desc="Name of the meme template the captions go on")
    language: str = dspy.InputField(desc="Language code the captions must be written in")
    response: str = dspy.OutputField(
        desc='A JSON object with "topText" and "bottomText" string properties, no more than 10 words each'
    )


@dataclass(frozen=True)
class Captions:
    """Caption text per slot. ``None`` means the slot is not filled."""

    top_text: Optional[str] = None
    bottom_text: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        data: Dict[str, str] = {}
        if self.top_text is not None:
            data["topText"] = self.top_text
        if self.bottom_text is not None:
            data["bottomText"] = self.bottom_text
        return data


def _drake(prompt: str) -> Captions:
    return Captions(top_text="The old way", bottom_text=prompt)


def _distracted_boyfriend(prompt: str) -> Captions:
    parts = prompt.split(" vs ")
    if len(parts) > 1:
        return Captions(top_text=parts[1], bottom_text=parts[0])
    return Captions(top_text="The new thing", bottom_text="What I should be focusing on")


def _success_kid(prompt: str) -> Captions:
    return Captions(top_text="", bottom_text=prompt.upper())


def _surprised_pikachu(prompt: str) -> Captions:
    return Captions(top_text=prompt, bottom_text="")


def _change_my_mind(prompt: str) -> Captions:
    return Captions(bottom_text=prompt)


TEMPLATE_CAPTION_RULES: Dict[str, Callable[[str], Captions]] = {
    "drake": _drake,
    "distracted-boyfriend": _distracted_boyfriend,
    "success-kid": _success_kid,
    "surprised-pikachu": _surprised_pikachu,
    "change-my-mind": _change_my_mind,
}


def fallback_captions(prompt: str, template: MemeTemplate, language: str = "en") -> Captions:
    """
    Rule-based captions. Pure: the same input always gives the same output.

    Args:
        prompt: The meme prompt
        template: Template the captions are for
        language: Caption language; the rules are language independent

    Returns:
        Captions for the slots the template defines
    """
    rule = TEMPLATE_CAPTION_RULES.get(template.id)
    if rule is not None:
        return rule(prompt)

    if template.has_top and template.has_bottom:
        words = prompt.split()
        midpoint = math.ceil(len(words) / 2)
        return Captions(top_text=" ".join(words[:midpoint]), bottom_text=" ".join(words[midpoint:]))
    if template.has_top:
        return Captions(top_text=prompt)
    if template.has_bottom:
        return Captions(bottom_text=prompt)
    return Captions()


def parse_caption_response(raw: Any) -> Captions:
    """
    Extract captions from a model response.

    The first ``{`` through the last ``}`` must decode to a JSON object with a
    string ``topText`` or ``bottomText``. Missing fields become empty strings.

    Raises:
        CaptionParseError: If no usable object can be found
    """
    if not isinstance(raw, str) or not raw.strip():
        raise CaptionParseError("Empty caption response", raw_response=raw)

    match = _JSON_OBJECT.search(raw)
    if match is None:
        raise CaptionParseError("No JSON object in caption response", raw_response=raw)

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise CaptionParseError(f"Malformed caption JSON: {e}", raw_response=raw) from e

    if not isinstance(parsed, dict):
        raise CaptionParseError("Caption response is not an object", raw_response=raw)

    top = parsed.get("topText")
    bottom = parsed.get("bottomText")
    if not isinstance(top, str) and not isinstance(bottom, str):
        raise CaptionParseError("Caption response has no topText or bottomText", raw_response=raw)

    return Captions(
        top_text=top if isinstance(top, str) else "",
        bottom_text=bottom if isinstance(bottom, str) else "",
    )


class CaptionGenerator(dspy.Module):
    """Agent for writing captions for a selected template."""

    def __init__(self, generator: Optional[Any] = None) -> None:
        """
        Initialize the caption generator.

        Args:
            generator: Callable taking ``prompt``, ``template_name`` and ``language``
                and returning an object with a ``response`` attribute; defaults to
                a DSPy predictor
        """
        super().__init__()
        self.generator = generator if generator is not None else dspy.Predict(
            GenerateCaptionsSignature,
            temperature=settings.dspy_caption_temperature,
            max_tokens=settings.dspy_max_tokens,
        )

    def forward(self, prompt: str, template: MemeTemplate, language: str = "en") -> Captions:
        """
        Generate captions, falling back to the rule-based captions on any failure.

        Args:
            prompt: The meme prompt
            template: Selected template
            language: Caption language

        Returns:
            Captions for the template
        """
        try:
            prediction = self.generator(prompt=prompt, template_name=template.name, language=language)
            captions = parse_caption_response(getattr(prediction, "response", None))
            logger.info("captions_generated", template_id=template.id, source="ai")
            return captions
        except CaptionParseError as e:
            logger.warning("caption_parse_failed", template_id=template.id, error=e.message)
        except Exception as e:
            logger.warning("caption_generation_failed", template_id=template.id, error=str(e))

        return fallback_captions(prompt, template, language)

    def generate_captions(self, prompt: str, template: MemeTemplate, language: str = "en") -> Captions:
        return self(prompt=prompt, template=template, language=language)
