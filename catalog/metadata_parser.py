"""
Metadata parser for DesignBook entries.

Parses metadata from HTML comments in markdown files.

Format:
<!--METADATA
id: singleton
category: creational_pattern
title: Singleton
-->

Unknown keys are kept; list values use indented "- item" lines.
"""

from __future__ import annotations

import re
from typing import Dict, Optional

from .categories import parse_category
from .errors import InvalidCategoryError, MetadataError

METADATA_PATTERN = re.compile(r'<!--\s*METADATA\s*\n(.*?)\n?\s*-->', re.DOTALL | re.IGNORECASE)
ID_PATTERN = re.compile(r'^[a-z0-9_-]+\Z')


def parse_metadata(content: str) -> Optional[Dict]:
    """Parse metadata from HTML comment block.

    Args:
        content: Markdown content containing metadata

    Returns:
        Dictionary with metadata fields, or None if no metadata found

    Raises:
        MetadataError: If metadata format is invalid

    Example:
        >>> content = '''
        ... <!--METADATA
        ... id: singleton
        ... category: creational_pattern
        ... -->
        ... ## Singleton
        ... '''
        >>> metadata = parse_metadata(content)
        >>> metadata['id']
        'singleton'
    """
    match = METADATA_PATTERN.search(content)

    if not match:
        return None

    return parse_metadata_text(match.group(1))


def parse_metadata_text(text: str) -> Dict:
    """Parse the metadata text content (without HTML comment markers).

    Raises:
        MetadataError: If parsing or validation fails
    """
    metadata = {}
    current_key = None
    list_values = []

    for line in text.split('\n'):
        line = line.strip()
        if not line:
            continue

        # List item belongs to the last key with an empty value
        if line.startswith('-'):
            if current_key is None:
                raise MetadataError(f"List item without a key: {line}")
            list_values.append(line[1:].strip())
            continue

        if ':' in line:
            # Save previous list if any
            if current_key and list_values:
                metadata[current_key] = list_values
                list_values = []

            key, value = line.split(':', 1)
            key = key.strip()
            value = value.strip()

            if value:
                metadata[key] = value
                current_key = None
            else:
                # Empty value means list follows
                current_key = key
                list_values = []
            continue

        raise MetadataError(f"Invalid metadata line: {line}")

    # Save final list if any
    if current_key and list_values:
        metadata[current_key] = list_values

    _validate_metadata(metadata)

    return metadata


def _validate_metadata(metadata: Dict) -> None:
    """Validate metadata fields and normalise the category in place.

    Raises:
        MetadataError: If validation fails
    """
    for field in ('id', 'category'):
        if field not in metadata:
            raise MetadataError(f"Missing required field: {field}")

    if not isinstance(metadata['id'], str) or not ID_PATTERN.match(metadata['id']):
        raise MetadataError(
            f"Invalid id '{metadata['id']}'. Must contain only lowercase letters, numbers, underscore, and hyphen."
        )

    try:
        metadata['category'] = parse_category(metadata['category'])
    except InvalidCategoryError as exc:
        raise MetadataError(str(exc)) from exc

    if 'title' in metadata and not isinstance(metadata['title'], str):
        raise MetadataError(f"'title' field must be a single value, got: {metadata['title']}")

