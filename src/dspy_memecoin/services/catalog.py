"""Static registry of meme templates."""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from ..exceptions.meme_specific import TemplateNotFoundError
from ..models.seed_data.templates import TEMPLATE_SEED
from ..models.template import MemeTemplate, TextSlot

ALL_CATEGORIES = "All"


def template_from_seed(entry: Mapping[str, Any]) -> MemeTemplate:
    """Build a template from one seed record."""
    slots = {
        name: (TextSlot(**geometry) if geometry is not None else None)
        for name, geometry in entry["text_slots"].items()
    }
    return MemeTemplate(
        id=entry["id"],
        name=entry["name"],
        image_ref=entry["image_ref"],
        categories=tuple(entry.get("categories", ())),
        text_slots=slots,
    )


class TemplateCatalog:
    """Ordered, read-only collection of templates keyed by id."""

    def __init__(self, templates: Iterable[MemeTemplate]) -> None:
        self._templates: List[MemeTemplate] = []
        self._by_id: Dict[str, MemeTemplate] = {}
        for template in templates:
            if template.id in self._by_id:
                raise ValueError(f"Duplicate template id in catalog: {template.id}")
            self._templates.append(template)
            self._by_id[template.id] = template
        if not self._templates:
            raise ValueError("Template catalog cannot be empty")

    @classmethod
    def from_seed(cls, seed: Iterable[Mapping[str, Any]] = TEMPLATE_SEED) -> "TemplateCatalog":
        return cls(template_from_seed(entry) for entry in seed)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[MemeTemplate]:
        return iter(self._templates)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._by_id

    @property
    def ids(self) -> List[str]:
        return [t.id for t in self._templates]

    def all(self) -> List[MemeTemplate]:
        return list(self._templates)

    def get(self, template_id: str) -> Optional[MemeTemplate]:
        return self._by_id.get(template_id)

    def require(self, template_id: str) -> MemeTemplate:
        """
        Look up a template that must exist.

        Raises:
            TemplateNotFoundError: If the id is not in the catalog
        """
        template = self._by_id.get(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)
        return template

    def by_category(self, category: str) -> List[MemeTemplate]:
        """Templates tagged with ``category`` (exact match). May be empty."""
        return [t for t in self._templates if t.in_category(category)]

    def filter_for(self, category: Optional[str]) -> List[MemeTemplate]:
        """
        Candidate templates for a generation request.

        ``None`` and ``"All"`` select the whole catalog. A category with no
        templates also selects the whole catalog instead of failing.
        """
        if not category or category == ALL_CATEGORIES:
            return self.all()
        return self.by_category(category) or self.all()

    def categories(self) -> List[str]:
        """Distinct category tags, sorted."""
        return sorted({c for t in self._templates for c in t.categories})


# Create a singleton instance
default_catalog = TemplateCatalog.from_seed()


def get_templates() -> List[MemeTemplate]:
    return default_catalog.all()


def get_template_by_id(template_id: str) -> Optional[MemeTemplate]:
    return default_catalog.get(template_id)


def get_templates_by_category(category: str) -> List[MemeTemplate]:
    return default_catalog.by_category(category)


def list_categories() -> List[str]:
    return default_catalog.categories()
