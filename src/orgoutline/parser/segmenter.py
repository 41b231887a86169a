"""Split outline text into heading-delimited blocks."""

import re
from functools import lru_cache
from typing import Iterator

DEFAULT_MARKER = "*"


def _check_marker(marker: str) -> None:
    if len(marker) != 1:
        raise ValueError(f"Marker must be a single character, got {marker!r}")


@lru_cache(maxsize=8)
def heading_pattern(marker: str = DEFAULT_MARKER) -> re.Pattern:
    """
    Return the line-boundary pattern for headings.

    Matches at the start of a line: one or more marker characters
    followed by one whitespace character.
    """
    _check_marker(marker)
    return re.compile(rf"^{re.escape(marker)}+\s", re.MULTILINE)


def find_heading_offsets(text: str, marker: str = DEFAULT_MARKER) -> list[int]:
    """Return the start offset of every heading line, left to right."""
    return [match.start() for match in heading_pattern(marker).finditer(text)]


def split_blocks(text: str, marker: str = DEFAULT_MARKER) -> Iterator[tuple[int, int]]:
    """
    Yield (start, end) ranges, one per heading block.

    Each block runs from a heading line start to the next heading line
    start, the last one to the end of the text. Anything before the first
    heading is dropped.
    """
    offsets = find_heading_offsets(text, marker)
    for idx, start in enumerate(offsets):
        end = offsets[idx + 1] if idx + 1 < len(offsets) else len(text)
        yield start, end


def iter_blocks(text: str, marker: str = DEFAULT_MARKER) -> Iterator[str]:
    """Yield the raw text of each heading block."""
    for start, end in split_blocks(text, marker):
        yield text[start:end]
