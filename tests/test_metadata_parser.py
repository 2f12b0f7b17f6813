from __future__ import annotations

import pytest

from catalog import Category, InvalidCategoryError, MetadataError, parse_category, parse_metadata


def test_parse_metadata_fields() -> None:
    content = """<!--METADATA
id: observer
category: Behavioral Pattern
title: Observer
tags:
    - events
    - pub-sub
-->
# Observer
"""
    metadata = parse_metadata(content)

    assert metadata["id"] == "observer"
    assert metadata["category"] is Category.BEHAVIORAL_PATTERN
    assert metadata["title"] == "Observer"
    assert metadata["tags"] == ["events", "pub-sub"]


def test_parse_metadata_without_block_returns_none() -> None:
    assert parse_metadata("# Plain heading\n\nNo metadata here.") is None


@pytest.mark.parametrize(
    "body, message",
    [
        ("category: solid", "Missing required field: id"),
        ("id: srp", "Missing required field: category"),
        ("id: Bad Id\ncategory: solid", "Invalid id 'Bad Id'"),
        ("id: srp\ncategory: nonsense", "Invalid category 'nonsense'"),
        ("- orphan\nid: srp\ncategory: solid", "List item without a key"),
        ("id: srp\ncategory: solid\njust words", "Invalid metadata line"),
        ("id: srp\ncategory: solid\ntitle:\n    - a\n    - b", "'title' field must be a single value"),
    ],
)
def test_invalid_metadata_raises(body: str, message: str) -> None:
    with pytest.raises(MetadataError, match=message):
        parse_metadata(f"<!--METADATA\n{body}\n-->")


@pytest.mark.parametrize(
    "value, expected",
    [
        (Category.SOLID, Category.SOLID),
        ("solid", Category.SOLID),
        ("SOLID", Category.SOLID),
        ("paradigms_practices", Category.PARADIGMS_PRACTICES),
        ("Paradigms & Practices", Category.PARADIGMS_PRACTICES),
        ("  database design ", Category.DATABASE_DESIGN),
    ],
)
def test_parse_category(value: object, expected: Category) -> None:
    assert parse_category(value) is expected


def test_parse_category_invalid() -> None:
    with pytest.raises(InvalidCategoryError) as excinfo:
        parse_category("Anti-Patterns")
    assert excinfo.value.value == "Anti-Patterns"
    assert "design_principles" in str(excinfo.value)


def test_category_labels_are_unique() -> None:
    labels = [c.label for c in Category]
    assert len(labels) == len(set(labels)) == 11
