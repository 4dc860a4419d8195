"""Reference extraction from assistant responses.

The assistant cites source documents by file name inside its answer text.
Extraction is a heuristic over the final text: any filename-shaped token
counts, so dotted words such as "e.g." or version numbers like "v1.2" are
picked up too. Names are not reconciled against the real file list here;
``link_references`` does that for display, and repeated citations are
collapsed only when rendered.
"""

import re
from collections.abc import Iterable

from assistant_chat.models.schemas import AssistantFile, Reference

# Word characters, hyphens and dots, ending in ".<alphanumeric extension>"
FILE_NAME_PATTERN = re.compile(r"[\w\-.]*\w\.[A-Za-z0-9]+")


def extract_references(content: str) -> list[Reference]:
    """Extract file-like tokens from response text.

    Args:
        content: The final assistant message text.

    Returns:
        One reference per match, in order. A file cited twice yields two
        references.
    """
    return [Reference(name=match.group(0)) for match in FILE_NAME_PATTERN.finditer(content)]


def unique_references(references: Iterable[Reference]) -> list[Reference]:
    """Drop repeated names, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[Reference] = []
    for ref in references:
        if ref.name not in seen:
            seen.add(ref.name)
            unique.append(ref)
    return unique


def link_references(
    references: Iterable[Reference],
    files: Iterable[AssistantFile],
) -> list[Reference]:
    """Fill in download links for references that match an assistant file."""
    urls = {f.name: f.signed_url for f in files if f.signed_url}
    return [
        ref if ref.url or ref.name not in urls else Reference(name=ref.name, url=urls[ref.name])
        for ref in references
    ]
