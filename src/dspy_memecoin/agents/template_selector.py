"""Template selection agent for choosing a meme template for a prompt."""

import json
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Set, Tuple, Union

import dspy

from ..config.config import settings
from ..exceptions.meme_specific import ClassifierError
from ..models.template import MemeTemplate
from ..services.catalog import TemplateCatalog, default_catalog
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Checked in order against the lower-cased prompt; the first keyword with a
# template in the candidate pool wins.
KEYWORD_TEMPLATE_MAP: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("success", ("success-kid",)),
    ("win", ("success-kid",)),
    ("works", ("success-kid",)),
    ("choose", ("two-buttons", "drake")),
    ("decision", ("two-buttons",)),
    ("opinion", ("change-my-mind",)),
    ("think", ("change-my-mind", "guy-thinking")),
    ("wait", ("waiting-skeleton",)),
    ("surprise", ("surprised-pikachu",)),
    ("unexpected", ("surprised-pikachu",)),
    ("relationship", ("distracted-boyfriend",)),
    ("distracted", ("distracted-boyfriend",)),
    ("better", ("drake", "distracted-boyfriend")),
    ("versus", ("drake",)),
    ("vs", ("drake",)),
    ("fine", ("this-is-fine",)),
    ("stress", ("this-is-fine",)),
    ("problem", ("this-is-fine", "first-world-problems")),
    ("simple", ("one-does-not-simply",)),
    ("impossible", ("one-does-not-simply",)),
    ("smart", ("expanding-brain", "galaxy-brain")),
    ("intelligence", ("expanding-brain",)),
    ("levels", ("expanding-brain",)),
)


class SelectTemplateSignature(dspy.Signature):
    """Select the most appropriate meme template for a text prompt from a list of candidates."""

    prompt: str = dspy.InputField(desc="The text prompt the meme should be about")
    candidates: str = dspy.InputField(desc="JSON list of candidate templates, each with an id and a name")
    template_id: str = dspy.OutputField(desc="The id of the single best candidate template, and nothing else")


class FallbackStrategy(str, Enum):
    """How to pick a template when the classifier cannot be trusted."""

    RANDOM = "random"
    KEYWORD = "keyword"


class SelectionMethod(str, Enum):
    """Which branch produced a selection."""

    AI = "ai"
    RANDOM = "random"
    KEYWORD = "keyword"
    BATCH_INDEX = "batch_index"


@dataclass(frozen=True)
class Selected:
    """The classifier returned a template id that is in the candidate pool."""

    template_id: str


@dataclass(frozen=True)
class NeedsFallback:
    """The classifier answer is unusable; ``strategy`` says which fallback applies."""

    reason: str
    strategy: FallbackStrategy


ClassifierOutcome = Union[Selected, NeedsFallback]


@dataclass(frozen=True)
class TemplateSelection:
    """Result of template selection."""

    template: MemeTemplate
    method: SelectionMethod
    reason: Optional[str] = None


class TemplateUsage:
    """
    Template ids already used in the current generation batch.

    One instance is owned per batch session, so concurrent batches never
    share state.
    """

    def __init__(self, used_ids: Iterable[str] = ()) -> None:
        self._used: Set[str] = set(used_ids)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._used

    def __len__(self) -> int:
        return len(self._used)

    @property
    def used_ids(self) -> Set[str]:
        return set(self._used)

    def mark(self, template_id: str) -> None:
        self._used.add(template_id)

    def reset(self) -> None:
        self._used.clear()

    def count_in(self, catalog: TemplateCatalog) -> int:
        return sum(1 for template_id in self._used if template_id in catalog)


def candidate_pool(
    catalog: TemplateCatalog,
    category: Optional[str],
    usage: TemplateUsage,
    reset_fraction: float,
) -> List[MemeTemplate]:
    """
    Templates eligible for the next pick in a batch.

    Unused templates of the (category-filtered) catalog are preferred. Once
    none are left the filtered list is returned; if more than
    ``reset_fraction`` of the whole catalog has been used, the batch usage is
    cleared as well.
    """
    filtered = catalog.filter_for(category)
    unused = [t for t in filtered if t.id not in usage]
    if unused:
        return unused
    if usage.count_in(catalog) > len(catalog) * reset_fraction:
        logger.info("template_usage_reset", used=len(usage), catalog_size=len(catalog))
        usage.reset()
    return filtered


def match_keyword(prompt: str, pool: Sequence[MemeTemplate]) -> Optional[MemeTemplate]:
    """Deterministic keyword lookup against the lower-cased prompt."""
    prompt_lower = prompt.lower()
    by_id = {t.id: t for t in pool}
    for keyword, template_ids in KEYWORD_TEMPLATE_MAP:
        if keyword not in prompt_lower:
            continue
        for template_id in template_ids:
            if template_id in by_id:
                return by_id[template_id]
    return None


class TemplateSelector(dspy.Module):
    """Agent for selecting the template that best fits a prompt."""

    def __init__(
        self,
        catalog: Optional[TemplateCatalog] = None,
        classifier: Optional[Any] = None,
        rng: Optional[random.Random] = None,
        reset_fraction: Optional[float] = None,
    ) -> None:
        """
        Initialize the template selector.

        Args:
            catalog: Template catalog, defaults to the built-in one
            classifier: Callable taking ``prompt`` and ``candidates`` and returning an
                object with a ``template_id`` attribute; defaults to a DSPy predictor
            rng: Random source for the random fallback
            reset_fraction: Share of the catalog after which an exhausted batch resets
        """
        super().__init__()
        self.catalog = catalog or default_catalog
        self.classifier = classifier if classifier is not None else dspy.Predict(
            SelectTemplateSignature,
            temperature=settings.dspy_selection_temperature,
            max_tokens=50,
        )
        self.rng = rng or random.Random()
        self.reset_fraction = (
            settings.batch_reset_fraction if reset_fraction is None else reset_fraction
        )

    def classify(self, prompt: str, pool: Sequence[MemeTemplate]) -> ClassifierOutcome:
        """
        Ask the classifier for one template id out of ``pool``.

        Never raises: classifier failures become ``NeedsFallback`` with the
        keyword strategy, out-of-pool answers use the random strategy.
        """
        options = [{"id": t.id, "name": t.name} for t in pool]
        try:
            prediction = self.classifier(prompt=prompt, candidates=json.dumps(options))
            template_id = getattr(prediction, "template_id", None)
            if not isinstance(template_id, str):
                raise ClassifierError(
                    "Classifier returned no template id", candidates=[o["id"] for o in options]
                )
        except Exception as e:
            logger.warning("template_classifier_failed", error=str(e))
            return NeedsFallback(reason=str(e), strategy=FallbackStrategy.KEYWORD)

        template_id = template_id.strip().strip("\"'`")
        if template_id not in {t.id for t in pool}:
            logger.warning("template_classifier_invalid_id", template_id=template_id)
            return NeedsFallback(
                reason=f"Classifier returned invalid template id: {template_id}",
                strategy=FallbackStrategy.RANDOM,
            )
        return Selected(template_id=template_id)

    def _fallback(self, prompt: str, pool: Sequence[MemeTemplate], outcome: NeedsFallback) -> TemplateSelection:
        if outcome.strategy is FallbackStrategy.KEYWORD:
            matched = match_keyword(prompt, pool)
            if matched is not None:
                return TemplateSelection(matched, SelectionMethod.KEYWORD, outcome.reason)
        return TemplateSelection(self.rng.choice(list(pool)), SelectionMethod.RANDOM, outcome.reason)

    def forward(
        self,
        prompt: str,
        category: Optional[str] = None,
        usage: Optional[TemplateUsage] = None,
        batch_index: Optional[int] = None,
    ) -> TemplateSelection:
        """
        Select a template and record it in ``usage``.

        Args:
            prompt: The meme prompt
            category: Optional category filter (``"All"`` means no filter)
            usage: Batch usage state; a throwaway one is used when omitted
            batch_index: When given, pick by index instead of asking the classifier

        Returns:
            TemplateSelection with the chosen template and the branch that chose it
        """
        usage = usage if usage is not None else TemplateUsage()
        pool = candidate_pool(self.catalog, category, usage, self.reset_fraction)

        if batch_index is not None:
            selection = TemplateSelection(pool[batch_index % len(pool)], SelectionMethod.BATCH_INDEX)
        else:
            outcome = self.classify(prompt, pool)
            if isinstance(outcome, Selected):
                template = next(t for t in pool if t.id == outcome.template_id)
                selection = TemplateSelection(template, SelectionMethod.AI)
            else:
                selection = self._fallback(prompt, pool, outcome)

        usage.mark(selection.template.id)
        logger.info(
            "template_selected",
            template_id=selection.template.id,
            method=selection.method.value,
            pool_size=len(pool),
        )
        return selection

    def select_template(
        self,
        prompt: str,
        category: Optional[str] = None,
        usage: Optional[TemplateUsage] = None,
        batch_index: Optional[int] = None,
    ) -> MemeTemplate:
        return self(prompt=prompt, category=category, usage=usage, batch_index=batch_index).template
