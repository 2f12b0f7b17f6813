"""
Immutable, queryable catalog of entries.

The catalog is built once from a fixed definition list and never changes
afterwards, so one instance can be shared by any number of readers.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Tuple

from .categories import Category, parse_category
from .definitions import load_definitions
from .errors import DefinitionError, NotFoundError
from .models import Entry

logger = logging.getLogger(__name__)


class Catalog:
    """Read-only collection of entries grouped by category."""

    def __init__(self, entries: Iterable[Entry]):
        """Build the catalog.

        Args:
            entries: Entries in definition order

        Raises:
            DefinitionError: If an item is not an Entry or an id is duplicated
        """
        ordered = tuple(entries)
        by_id: Dict[str, Entry] = {}

        for position, entry in enumerate(ordered):
            if not isinstance(entry, Entry):
                raise DefinitionError(f"Item {position} is not an Entry: {entry!r}")
            if entry.id in by_id:
                raise DefinitionError(f"Duplicate entry id '{entry.id}'")
            by_id[entry.id] = entry

        by_category = {
            category: tuple(e for e in ordered if e.category is category)
            for category in Category
        }

        self._by_id: Mapping[str, Entry] = MappingProxyType(by_id)
        self._by_category: Mapping[Category, Tuple[Entry, ...]] = MappingProxyType(by_category)
        self._all: Tuple[Entry, ...] = tuple(
            entry for category in Category for entry in by_category[category]
        )

    @classmethod
    def from_source(cls, path: Path) -> "Catalog":
        """Build a catalog from a JSON or markdown definition file.

        Raises:
            DefinitionError: If the source cannot be read or validated
        """
        catalog = cls(load_definitions(Path(path)))
        logger.info("Loaded %d entries from %s", len(catalog), path)
        return catalog

    def get(self, entry_id: str) -> Entry:
        """Get entry by id.

        Raises:
            NotFoundError: If no entry has this id
        """
        try:
            return self._by_id[entry_id]
        except (KeyError, TypeError):
            raise NotFoundError(entry_id) from None

    def list_by_category(self, category: object) -> Tuple[Entry, ...]:
        """Entries of one category in definition order.

        Args:
            category: Category member, slug or label

        Raises:
            InvalidCategoryError: If category is not recognised
        """
        return self._by_category[parse_category(category)]

    def all(self) -> Tuple[Entry, ...]:
        """Every entry, category-major then definition order."""
        return self._all

    def search(self, keyword: str) -> Tuple[Entry, ...]:
        """Entries whose title or explanation contains keyword (case-insensitive).

        A blank keyword matches nothing.

        Example:
            >>> [e.id for e in catalog.search("singleton")]
            ['singleton']
        """
        if not keyword or not keyword.strip():
            return ()

        needle = keyword.casefold()

        return tuple(
            entry for entry in self._all
            if needle in entry.title.casefold() or needle in entry.explanation.casefold()
        )

    def categories(self) -> Tuple[Category, ...]:
        """Categories that hold at least one entry, in declaration order."""
        return tuple(c for c in Category if self._by_category[c])

    def stats(self) -> Dict[str, int]:
        """Entry counts by category label, plus the total."""
        counts = {c.label: len(self._by_category[c]) for c in self.categories()}
        counts["total"] = len(self._all)
        return counts

    def __len__(self) -> int:
        return len(self._all)

    def __contains__(self, entry_id: object) -> bool:
        return isinstance(entry_id, str) and entry_id in self._by_id

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._all)

    def __repr__(self) -> str:
        return f"Catalog({len(self._all)} entries)"
