"""
Exceptions raised by the DesignBook catalog.

Query errors (unknown id, unknown category) are ordinary negative results
for the caller. Definition errors mean no catalog could be built at all.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog errors."""
    pass


class NotFoundError(CatalogError, KeyError):
    """Exception raised when an entry id is not in the catalog."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Entry '{entry_id}' not found in catalog")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class InvalidCategoryError(CatalogError, ValueError):
    """Exception raised when a value is not a recognised category."""

    def __init__(self, value: object, valid: list[str] | None = None):
        self.value = value
        message = f"Invalid category '{value}'"
        if valid:
            message += f". Must be one of: {valid}"
        super().__init__(message)


class DefinitionError(CatalogError, ValueError):
    """Exception raised when the definition source cannot produce a catalog."""
    pass


class MetadataError(DefinitionError):
    """Exception raised when a markdown metadata block is invalid."""
    pass
