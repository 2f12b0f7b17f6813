"""
Definition source loading for the DesignBook catalog.

A definition source is read once at startup. Supported formats:
    *.json      - list of entry records, or {"entries": [...]} as written
                  by CatalogBuilder
    *.md        - annotated markdown (see entry_extractor)

Record format (JSON):
    {
        "id": "singleton",
        "title": "Singleton",
        "category": "creational_pattern",
        "explanation": "...",
        "example_label": "python",
        "example_text": "class Config: ...",
        "references": [{"label": "...", "url": "https://..."}]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .categories import Category, parse_category
from .entry_extractor import DEFAULT_EXAMPLE_LABEL, extract_entries
from .errors import DefinitionError, InvalidCategoryError
from .metadata_parser import ID_PATTERN
from .models import Entry, Example, Reference

MARKDOWN_SUFFIXES = {".md", ".markdown"}
JSON_SUFFIXES = {".json"}


class ReferenceRecord(BaseModel):
    label: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class EntryRecord(BaseModel):
    id: str
    title: str = Field(..., min_length=1)
    category: Category
    explanation: str = ""
    example_label: Optional[str] = None
    example_text: Optional[str] = None
    references: List[ReferenceRecord] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def check_id(cls, value: str) -> str:
        if not ID_PATTERN.match(value):
            raise ValueError(
                "must contain only lowercase letters, numbers, underscore, and hyphen"
            )
        return value

    @field_validator("category", mode="before")
    @classmethod
    def resolve_category(cls, value: object) -> Category:
        try:
            return parse_category(value)
        except InvalidCategoryError as exc:
            raise ValueError(str(exc)) from exc

    @model_validator(mode="after")
    def check_example(self) -> "EntryRecord":
        if self.example_label and self.example_text is None:
            raise ValueError("example_label given without example_text")
        return self

    def to_entry(self) -> Entry:
        example = None
        if self.example_text is not None:
            example = Example(
                label=self.example_label or DEFAULT_EXAMPLE_LABEL,
                text=self.example_text,
            )
        return Entry(
            id=self.id,
            title=self.title,
            category=self.category,
            explanation=self.explanation,
            example=example,
            references=tuple(Reference(label=r.label, url=r.url) for r in self.references),
        )


def load_definitions(path: Path) -> List[Entry]:
    """Load entries from a definition source file.

    Args:
        path: JSON or markdown definition file

    Returns:
        Entries in definition order

    Raises:
        DefinitionError: If the file is missing, unsupported or invalid
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in MARKDOWN_SUFFIXES | JSON_SUFFIXES:
        raise DefinitionError(f"Unsupported definition source '{path}' (expected .json or .md)")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DefinitionError(f"Cannot read definition source '{path}': {exc}") from exc

    if suffix in MARKDOWN_SUFFIXES:
        return extract_entries(content, str(path))

    return parse_records(content, str(path))


def parse_records(content: str, source_file: str = "unknown") -> List[Entry]:
    """Parse JSON definition records into entries.

    Raises:
        DefinitionError: If the JSON is malformed or any record is invalid
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise DefinitionError(f"{source_file}: invalid JSON: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("entries")

    if not isinstance(data, list):
        raise DefinitionError(f"{source_file}: expected a list of entries or an object with 'entries'")

    entries = []
    for index, record in enumerate(data):
        try:
            entries.append(EntryRecord.model_validate(record).to_entry())
        except ValidationError as exc:
            raise DefinitionError(f"{source_file}: invalid entry at index {index}: {exc}") from exc

    return entries
