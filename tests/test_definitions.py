from __future__ import annotations

import json
from pathlib import Path

import pytest

from catalog import Catalog, Category, DefinitionError, Example, Reference, load_definitions

from conftest import SAMPLE_MARKDOWN

RECORDS = [
    {
        "id": "singleton",
        "title": "Singleton",
        "category": "creational_pattern",
        "explanation": "Ensures a class has only one instance.",
        "example_label": "python",
        "example_text": "class Config: ...",
        "references": [
            {"label": "Refactoring Guru", "url": "https://refactoring.guru/design-patterns/singleton"}
        ],
    },
    {
        "id": "acid",
        "title": "ACID",
        "category": "Database Design",
        "explanation": "Transaction guarantees.",
    },
]


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_json_record_list(tmp_path: Path) -> None:
    entries = load_definitions(write_json(tmp_path / "defs.json", RECORDS))

    assert [e.id for e in entries] == ["singleton", "acid"]
    singleton, acid = entries
    assert singleton.category is Category.CREATIONAL_PATTERN
    assert singleton.example == Example("python", "class Config: ...")
    assert singleton.references == (
        Reference("Refactoring Guru", "https://refactoring.guru/design-patterns/singleton"),
    )
    assert acid.category is Category.DATABASE_DESIGN
    assert acid.example is None
    assert acid.references == ()


def test_load_json_entries_object(tmp_path: Path) -> None:
    path = write_json(tmp_path / "catalog.json", {"version": "1.0", "entries": RECORDS})
    assert [e.id for e in load_definitions(path)] == ["singleton", "acid"]


def test_example_text_without_label_defaults_to_text(tmp_path: Path) -> None:
    record = {**RECORDS[1], "example_text": "BEGIN; COMMIT;"}
    [entry] = load_definitions(write_json(tmp_path / "defs.json", [record]))
    assert entry.example == Example("text", "BEGIN; COMMIT;")


def test_record_round_trip(tmp_path: Path) -> None:
    entries = load_definitions(write_json(tmp_path / "defs.json", RECORDS))
    assert entries[0].to_record() == {**RECORDS[0]}


@pytest.mark.parametrize(
    "record",
    [
        {**RECORDS[1], "category": "Gang of Four"},
        {**RECORDS[1], "id": "Not Valid"},
        {**RECORDS[1], "id": "acid\n"},
        {**RECORDS[1], "title": ""},
        {**RECORDS[1], "example_label": "sql"},
        {**RECORDS[1], "references": [{"label": "no url"}]},
        {"id": "acid", "category": "database_design"},
    ],
)
def test_invalid_record_raises(tmp_path: Path, record: dict) -> None:
    path = write_json(tmp_path / "defs.json", [RECORDS[0], record])
    with pytest.raises(DefinitionError, match="invalid entry at index 1"):
        load_definitions(path)


def test_malformed_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "defs.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(DefinitionError, match="invalid JSON"):
        load_definitions(path)


def test_json_without_entries_raises(tmp_path: Path) -> None:
    with pytest.raises(DefinitionError, match="expected a list"):
        load_definitions(write_json(tmp_path / "defs.json", {"items": []}))


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DefinitionError, match="Cannot read"):
        load_definitions(tmp_path / "missing.json")


def test_unsupported_suffix_raises(tmp_path: Path) -> None:
    path = tmp_path / "defs.yaml"
    path.write_text("- id: x", encoding="utf-8")
    with pytest.raises(DefinitionError, match="Unsupported definition source"):
        load_definitions(path)


def test_load_markdown(tmp_path: Path) -> None:
    path = tmp_path / "guide.md"
    path.write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    assert [e.id for e in load_definitions(path)] == ["singleton", "factory_method", "open_closed"]


def test_catalog_from_source(tmp_path: Path) -> None:
    catalog = Catalog.from_source(write_json(tmp_path / "defs.json", RECORDS))
    assert catalog.get("acid").title == "ACID"


def test_catalog_from_source_duplicate_ids_fails(tmp_path: Path) -> None:
    path = write_json(tmp_path / "defs.json", [RECORDS[0], RECORDS[0]])
    with pytest.raises(DefinitionError, match="Duplicate"):
        Catalog.from_source(path)
