"""
Entry records held by the catalog.

Every documented principle, practice or pattern is one ``Entry``; the kind of
topic is carried by its ``category`` rather than by a class per topic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .categories import Category, parse_category


@dataclass(frozen=True)
class Reference:
    """External article linked from an entry."""
    label: str
    url: str


@dataclass(frozen=True)
class Example:
    """Illustrative snippet. Stored as opaque text, never executed."""
    label: str  # notional language, e.g. "python"
    text: str


@dataclass(frozen=True)
class Entry:
    """One documented principle or pattern."""
    id: str
    title: str
    category: Category
    explanation: str
    example: Optional[Example] = None
    references: Tuple[Reference, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "category", parse_category(self.category))
        if not isinstance(self.references, tuple):
            object.__setattr__(self, "references", tuple(self.references))

    def to_record(self) -> Dict:
        """Flat definition record, the format read back by load_definitions."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.value,
            "explanation": self.explanation,
            "example_label": self.example.label if self.example else None,
            "example_text": self.example.text if self.example else None,
            "references": [
                {"label": ref.label, "url": ref.url}
                for ref in self.references
            ],
        }
