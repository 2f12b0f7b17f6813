"""
Catalog module for DesignBook reference entries.

This module provides functionality for:
- Parsing metadata from annotated markdown
- Extracting entries (principle, practice or pattern) from heading structure
- Loading the definition source (JSON or markdown)
- Querying the immutable catalog
- Building catalog.json and checking reference links

Metadata format (in markdown):
    <!--METADATA
    id: open_closed                 (required, unique)
    category: solid                 (required, slug or label)
    title: Open/Closed Principle    (optional, defaults to the heading)
    -->

Usage:
    from catalog import Catalog

    catalog = Catalog.from_source(Path("md/design_principles.md"))

    entry = catalog.get("singleton")
    solid = catalog.list_by_category("solid")
    hits = catalog.search("coupling")
"""

from .categories import Category, parse_category
from .errors import (
    CatalogError,
    DefinitionError,
    InvalidCategoryError,
    MetadataError,
    NotFoundError,
)
from .models import Entry, Example, Reference
from .metadata_parser import parse_metadata
from .entry_extractor import extract_entries
from .definitions import load_definitions
from .store import Catalog
from .builder import CatalogBuilder, export_catalog

__all__ = [
    "Category",
    "parse_category",
    "CatalogError",
    "DefinitionError",
    "InvalidCategoryError",
    "MetadataError",
    "NotFoundError",
    "Entry",
    "Example",
    "Reference",
    "parse_metadata",
    "extract_entries",
    "load_definitions",
    "Catalog",
    "CatalogBuilder",
    "export_catalog",
]

__version__ = "1.0.0"
