"""Meme template domain model."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

TOP_SLOT = "top"
BOTTOM_SLOT = "bottom"
SLOT_NAMES = (TOP_SLOT, BOTTOM_SLOT)


@dataclass(frozen=True)
class TextSlot:
    """Placement of one caption on a template image, in template pixels."""

    x: int
    y: int
    max_width: int

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "maxWidth": self.max_width}


@dataclass(frozen=True)
class MemeTemplate:
    """
    Immutable catalog entry.

    Attributes:
        id: Unique template identifier (kebab-case)
        name: Display name
        image_ref: URL of the blank template image
        categories: Category tags, in catalog order
        text_slots: Slot name (``top``/``bottom``) to geometry
    """

    id: str
    name: str
    image_ref: str
    categories: Tuple[str, ...] = ()
    text_slots: Mapping[str, Optional[TextSlot]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.text_slots:
            raise ValueError(f"Template {self.id!r} must define at least one text slot")
        unknown = set(self.text_slots) - set(SLOT_NAMES)
        if unknown:
            raise ValueError(f"Template {self.id!r} has unknown text slots: {sorted(unknown)}")

    @property
    def has_top(self) -> bool:
        return self.text_slots.get(TOP_SLOT) is not None

    @property
    def has_bottom(self) -> bool:
        return self.text_slots.get(BOTTOM_SLOT) is not None

    def in_category(self, category: str) -> bool:
        """Exact, case-sensitive category tag match."""
        return category in self.categories

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the catalog listing."""
        return {
            "id": self.id,
            "name": self.name,
            "url": self.image_ref,
            "categories": list(self.categories),
            "textPositions": {
                name: (slot.to_dict() if slot is not None else None)
                for name, slot in self.text_slots.items()
            },
        }
