"""
Fixed category set for catalog entries.

Declaration order is the category-major order used when traversing the
whole catalog.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict

from .errors import InvalidCategoryError


class Category(str, Enum):
    """Classification bucket an entry belongs to (value is the slug)."""

    DESIGN_PRINCIPLES = "design_principles"
    SOLID = "solid"
    PARADIGMS_PRACTICES = "paradigms_practices"
    TESTING = "testing"
    DATABASE_DESIGN = "database_design"
    ARCHITECTURAL_PATTERNS = "architectural_patterns"
    FUNDAMENTAL_CONCEPTS = "fundamental_concepts"
    COMPREHENSIVE_PRINCIPLES = "comprehensive_principles"
    CREATIONAL_PATTERN = "creational_pattern"
    STRUCTURAL_PATTERN = "structural_pattern"
    BEHAVIORAL_PATTERN = "behavioral_pattern"

    @property
    def slug(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS: Dict[Category, str] = {
    Category.DESIGN_PRINCIPLES: "Design Principles",
    Category.SOLID: "SOLID",
    Category.PARADIGMS_PRACTICES: "Paradigms & Practices",
    Category.TESTING: "Testing",
    Category.DATABASE_DESIGN: "Database Design",
    Category.ARCHITECTURAL_PATTERNS: "Architectural Patterns",
    Category.FUNDAMENTAL_CONCEPTS: "Fundamental Concepts",
    Category.COMPREHENSIVE_PRINCIPLES: "Comprehensive Principles",
    Category.CREATIONAL_PATTERN: "Creational Pattern",
    Category.STRUCTURAL_PATTERN: "Structural Pattern",
    Category.BEHAVIORAL_PATTERN: "Behavioral Pattern",
}

# Lookup keys: lowercase slug and lowercase label
_LOOKUP: Dict[str, Category] = {
    **{category.value: category for category in Category},
    **{label.lower(): category for category, label in _LABELS.items()},
}


def parse_category(value: object) -> Category:
    """Resolve a category from an enum member, slug or label.

    Args:
        value: Category member, slug ("solid") or label ("SOLID")

    Returns:
        The matching Category member

    Raises:
        InvalidCategoryError: If value is not a recognised category

    Example:
        >>> parse_category("Creational Pattern")
        <Category.CREATIONAL_PATTERN: 'creational_pattern'>
    """
    if isinstance(value, Category):
        return value

    if isinstance(value, str):
        category = _LOOKUP.get(value.strip().lower())
        if category is not None:
            return category

    raise InvalidCategoryError(value, [c.value for c in Category])
