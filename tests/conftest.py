from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make packages importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog import Catalog, Category, Entry, Example, Reference  # noqa: E402

GUIDE_PATH = ROOT / "md" / "design_principles.md"


SAMPLE_MARKDOWN = """# Guide

Intro text that belongs to no entry.

## Creational

<!--METADATA
id: singleton
category: creational_pattern
-->
### Singleton

Ensures a class has only one instance.

```python
# one instance only
class Config:
    _instance = None
```

**References**
- [Singleton - Refactoring Guru](https://refactoring.guru/design-patterns/singleton)

#### Pitfalls

Hidden global state makes testing harder.

<!--METADATA
id: factory_method
category: Creational Pattern
title: Factory Method Pattern
-->
### Factory Method

Lets subclasses decide which class to instantiate.

## SOLID

<!--METADATA
id: open_closed
category: solid
-->
### Open/Closed Principle

Open for extension, closed for modification. See
[the wiki](https://en.wikipedia.org/wiki/Open%E2%80%93closed_principle) and
[Fowler](https://martinfowler.com/bliki/OpenClosedPrinciple.html).
"""


@pytest.fixture
def sample_entries() -> list[Entry]:
    return [
        Entry(
            id="observer",
            title="Observer",
            category=Category.BEHAVIORAL_PATTERN,
            explanation="Notifies subscribers when state changes.",
        ),
        Entry(
            id="single_responsibility",
            title="Single Responsibility Principle",
            category=Category.SOLID,
            explanation="A class should have one reason to change.",
            references=(Reference("SRP - Wikipedia", "https://en.wikipedia.org/wiki/Single-responsibility_principle"),),
        ),
        Entry(
            id="singleton",
            title="Singleton",
            category=Category.CREATIONAL_PATTERN,
            explanation="Ensures a class has only one instance.",
            example=Example("python", "class Config: ..."),
            references=(Reference("Singleton", "https://refactoring.guru/design-patterns/singleton"),),
        ),
        Entry(
            id="open_closed",
            title="Open/Closed Principle",
            category=Category.SOLID,
            explanation="Open for extension, closed for modification.",
        ),
        Entry(
            id="strategy",
            title="Strategy",
            category=Category.BEHAVIORAL_PATTERN,
            explanation="Interchangeable algorithms behind one interface.",
            references=(Reference("Singleton", "https://refactoring.guru/design-patterns/singleton"),),
        ),
    ]


@pytest.fixture
def catalog(sample_entries: list[Entry]) -> Catalog:
    return Catalog(sample_entries)


@pytest.fixture(scope="session")
def guide_catalog() -> Catalog:
    return Catalog.from_source(GUIDE_PATH)
