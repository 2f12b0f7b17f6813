"""
Entry extractor for the DesignBook catalog.

Extracts entries from markdown based on heading structure and metadata.

Rules:
1. An entry is always a heading scope that has a metadata block right before it
2. Headings without metadata that sit deeper than an open entry are folded
   into that entry's body; other headings only group and are skipped
3. The first fenced code block of an entry is its example
4. Every http(s) markdown link in an entry is one of its references
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from .errors import MetadataError
from .metadata_parser import parse_metadata
from .models import Entry, Example, Reference

logger = logging.getLogger(__name__)

METADATA_START_PATTERN = re.compile(r'^\s*<!--\s*METADATA\b', re.IGNORECASE)
HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.+)$')
FENCE_PATTERN = re.compile(r'^\s*(`{3,}|~{3,})\s*([\w+#.-]*)\s*$')
URL_PART = r'https?://(?:[^()\s]|\([^()\s]*\))+'
LINK_PATTERN = re.compile(r'\[([^\]]+)\]\((' + URL_PART + r')\)')
REFERENCE_LINE_PATTERN = re.compile(r'^\s*[-*+]\s*\[[^\]]+\]\(' + URL_PART + r'\)\s*$')
REFERENCES_CAPTION_PATTERN = re.compile(
    r'^\s*(?:#{1,6}\s*)?[*_]*(?:references?|further reading|see also)[*_]*:?[*_]*\s*$',
    re.IGNORECASE,
)

DEFAULT_EXAMPLE_LABEL = "text"


def extract_entries(markdown_content: str, source_file: str = "unknown") -> List[Entry]:
    """Extract entries from markdown content based on metadata and heading structure.

    Two-step process:
    1. Split the document into heading sections (outside code fences)
    2. Group sections into entries using a stack of open entries

    Args:
        markdown_content: Full markdown file content
        source_file: Name of source file (for error reporting)

    Returns:
        List of Entry objects in document order

    Raises:
        MetadataError: If any metadata block is invalid or dangling

    Example:
        >>> content = '''
        ... <!--METADATA
        ... id: dry
        ... category: design_principles
        ... -->
        ... ## DRY
        ... Every piece of knowledge has one representation.
        ... '''
        >>> [e.id for e in extract_entries(content)]
        ['dry']
    """
    sections = _parse_sections(markdown_content, source_file)

    if not sections:
        return []

    drafts = _group_sections(sections)
    entries = [_make_entry(draft) for draft in drafts]

    logger.info("Extracted %d entries from %s", len(entries), source_file)
    return entries


def _parse_sections(markdown_content: str, source_file: str) -> List[Dict]:
    """Split markdown into heading sections.

    Returns flat list of sections with:
    - level: heading level (1-6)
    - heading: heading text
    - metadata: parsed metadata dict, or None
    - line: line number of the heading
    - body: body lines up to the next section
    """
    sections = []
    current = None
    pending: Optional[Tuple[Dict, int]] = None
    metadata_lines: Optional[List[str]] = None
    metadata_start = 0
    fence: Optional[str] = None

    for line_no, line in enumerate(markdown_content.splitlines(), start=1):
        if metadata_lines is None and fence is None and METADATA_START_PATTERN.match(line):
            if pending is not None:
                raise MetadataError(
                    f"{source_file}:{pending[1]}: metadata block is not followed by a heading"
                )
            metadata_lines = []
            metadata_start = line_no

        if metadata_lines is not None:
            metadata_lines.append(line)
            if '-->' in line:
                pending = (_parse_block(metadata_lines, source_file, metadata_start), metadata_start)
                metadata_lines = None
            continue

        fence_match = FENCE_PATTERN.match(line)
        if fence is not None:
            if _closes_fence(fence_match, fence):
                fence = None
        elif fence_match:
            fence = fence_match.group(1)
        else:
            heading_match = HEADING_PATTERN.match(line)
            if heading_match:
                current = {
                    'level': len(heading_match.group(1)),
                    'heading': heading_match.group(2).strip(),
                    'metadata': pending[0] if pending else None,
                    'line': line_no,
                    'body': [],
                }
                sections.append(current)
                pending = None
                continue

        if current is not None:
            current['body'].append(line)

    if metadata_lines is not None:
        raise MetadataError(f"{source_file}:{metadata_start}: unterminated metadata block")

    if pending is not None:
        raise MetadataError(f"{source_file}:{pending[1]}: metadata block is not followed by a heading")

    return sections


def _parse_block(lines: List[str], source_file: str, line_no: int) -> Dict:
    """Parse one collected metadata comment, prefixing errors with its location."""
    block = '\n'.join(lines)
    try:
        metadata = parse_metadata(block)
    except MetadataError as exc:
        raise MetadataError(f"{source_file}:{line_no}: {exc}") from exc

    if metadata is None:
        raise MetadataError(f"{source_file}:{line_no}: malformed metadata block")

    return metadata


def _group_sections(sections: List[Dict]) -> List[Dict]:
    """Group sections into entry drafts.

    Rules:
    - Section WITH metadata -> new entry, pushed on the stack
    - Section WITHOUT metadata -> appended to the closest open entry above it
    - Stack pops entries at the same or a higher level
    """
    drafts = []
    stack = []

    for section in sections:
        level = section['level']

        while stack and stack[-1]['level'] >= level:
            stack.pop()

        if section['metadata'] is not None:
            draft = {
                'level': level,
                'heading': section['heading'],
                'metadata': section['metadata'],
                'body': list(section['body']),
            }
            drafts.append(draft)
            stack.append(draft)
        elif stack:
            # Keep the sub-heading so the folded text still reads in order
            parent = stack[-1]
            parent['body'].append(f"{'#' * level} {section['heading']}")
            parent['body'].extend(section['body'])
        else:
            logger.debug("Skipping grouping heading '%s' (line %d)", section['heading'], section['line'])

    return drafts


def _make_entry(draft: Dict) -> Entry:
    """Build an Entry from a grouped draft."""
    metadata = draft['metadata']
    explanation_lines = []
    link_lines = []
    example = None
    fence_lines: Optional[List[str]] = None
    fence: Optional[str] = None
    fence_label = DEFAULT_EXAMPLE_LABEL

    for line in draft['body']:
        fence_match = FENCE_PATTERN.match(line)

        if fence_lines is not None:
            if _closes_fence(fence_match, fence):
                if example is None:
                    example = Example(label=fence_label, text='\n'.join(fence_lines))
                fence_lines = None
            else:
                fence_lines.append(line)
            continue

        if fence_match:
            fence_lines = []
            fence = fence_match.group(1)
            fence_label = fence_match.group(2) or DEFAULT_EXAMPLE_LABEL
            continue

        link_lines.append(line)
        if REFERENCE_LINE_PATTERN.match(line) or REFERENCES_CAPTION_PATTERN.match(line):
            continue
        explanation_lines.append(line)

    # Unclosed fence at the end of the document
    if fence_lines is not None and example is None:
        example = Example(label=fence_label, text='\n'.join(fence_lines))

    return Entry(
        id=metadata['id'],
        title=metadata.get('title') or draft['heading'],
        category=metadata['category'],
        explanation=_clean_text('\n'.join(explanation_lines)),
        example=example,
        references=_extract_references('\n'.join(link_lines)),
    )


def _closes_fence(fence_match, opener: str) -> bool:
    """A fence closes on the same character, at least as long, with no info string."""
    if fence_match is None or fence_match.group(2):
        return False
    marker = fence_match.group(1)
    return marker[0] == opener[0] and len(marker) >= len(opener)


def _extract_references(content: str) -> Tuple[Reference, ...]:
    """Extract http(s) links as references, first occurrence of each URL wins."""
    references = []
    seen = set()
    for label, url in LINK_PATTERN.findall(content):
        if url in seen:
            continue
        seen.add(url)
        references.append(Reference(label=label.strip(), url=url))
    return tuple(references)


def _clean_text(text: str) -> str:
    """Collapse runs of blank lines and strip surrounding whitespace."""
    text = re.sub(r'[ \t]+\n', '\n', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()
