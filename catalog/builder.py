"""
Catalog builder for DesignBook.

Builds the versioned JSON definition file from annotated markdown:
- Extracts entries from each markdown file in order
- Validates them as one catalog (unique ids) before anything is written
- Writes catalog.json, which load_definitions reads back
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List

from .entry_extractor import extract_entries
from .store import Catalog

logger = logging.getLogger(__name__)

CATALOG_FORMAT_VERSION = "1.0"


class CatalogBuilder:
    """Builds the catalog.json definition file."""

    def __init__(self, catalog_dir: Path):
        """Initialize catalog builder.

        Args:
            catalog_dir: Directory to store catalog (e.g., output/catalog)
        """
        self.catalog_dir = Path(catalog_dir)
        self.catalog_file = self.catalog_dir / "catalog.json"

    def build_from_markdown(self, source_paths: Iterable[Path], clean_existing: bool = False) -> Dict:
        """Build catalog from one or more markdown files.

        Args:
            source_paths: Markdown files, read in the given order
            clean_existing: If True, remove the existing catalog once the sources validate

        Returns:
            Dictionary with build statistics

        Raises:
            FileNotFoundError: If a source file does not exist
            DefinitionError: If metadata is invalid or ids collide across files

        Example:
            >>> builder = CatalogBuilder(Path("output/catalog"))
            >>> stats = builder.build_from_markdown([Path("md/design_principles.md")])
            >>> print(f"Extracted {stats['entries_count']} entries")
        """
        source_paths = [Path(p) for p in source_paths]

        entries = []
        for source_path in source_paths:
            if not source_path.exists():
                raise FileNotFoundError(f"Source file not found: {source_path}")

            content = source_path.read_text(encoding='utf-8')
            entries.extend(extract_entries(content, str(source_path)))

        # Validate as a whole; a failure here leaves the catalog dir untouched
        catalog = Catalog(entries)

        if clean_existing:
            self._clean_catalog()

        if len(catalog):
            self._save_catalog(self._build_catalog_data(catalog, source_paths))
            logger.info("Built catalog with %d entries at %s", len(catalog), self.catalog_file)
        else:
            logger.warning("No entries with metadata found in %d source files", len(source_paths))

        stats = {
            "entries_count": len(catalog),
            "source_files": [str(p) for p in source_paths],
            "catalog_file": str(self.catalog_file),
            "timestamp": datetime.now().isoformat(),
            "by_category": self._count_by_category(catalog),
        }

        return stats

    def _build_catalog_data(self, catalog: Catalog, source_files: List[Path]) -> Dict:
        """Build catalog index data."""
        return {
            "version": CATALOG_FORMAT_VERSION,
            "created_at": datetime.now().isoformat(),
            "source_files": [str(p) for p in source_files],
            "total_entries": len(catalog),
            "entries": [entry.to_record() for entry in catalog.all()],
        }

    def _save_catalog(self, catalog_data: Dict) -> None:
        """Save catalog index to JSON, replacing any previous file in one step."""
        self.catalog_file.parent.mkdir(parents=True, exist_ok=True)
        tmp_file = self.catalog_file.with_name(self.catalog_file.name + ".tmp")
        tmp_file.write_text(
            json.dumps(catalog_data, indent=2, ensure_ascii=False),
            encoding='utf-8'
        )
        tmp_file.replace(self.catalog_file)

    def _clean_catalog(self) -> None:
        """Remove existing catalog file."""
        if self.catalog_file.exists():
            self.catalog_file.unlink()

    def _count_by_category(self, catalog: Catalog) -> Dict[str, int]:
        counts = catalog.stats()
        counts.pop("total", None)
        return counts


def export_catalog(catalog: Catalog, path: Path, source_files: Iterable[Path] = ()) -> Path:
    """Write an already-built catalog in the catalog.json format.

    Args:
        catalog: Catalog to export
        path: Destination JSON file
        source_files: Files the catalog was built from (recorded only)

    Returns:
        The written path
    """
    path = Path(path)
    builder = CatalogBuilder(path.parent)
    builder.catalog_file = path
    builder._save_catalog(builder._build_catalog_data(catalog, [Path(p) for p in source_files]))
    return path
