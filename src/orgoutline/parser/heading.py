"""Heading line and block parsing."""

from typing import NamedTuple, Optional

from ..exceptions import MalformedHeading
from .segmenter import DEFAULT_MARKER, _check_marker


class ParsedBlock(NamedTuple):
    """Depth, title and body of a single heading block."""
    depth: int
    title: str
    body: str


def _marker_run(text: str, marker: str) -> int:
    """Count consecutive marker characters from the start of text."""
    depth = 0
    for char in text:
        if char != marker:
            break
        depth += 1
    return depth


def _split_heading(text: str, marker: str, offset: Optional[int]) -> tuple[int, str, int]:
    """Return (depth, title, newline_index) for text starting with a heading."""
    _check_marker(marker)
    depth = _marker_run(text, marker)
    if depth == 0 or depth >= len(text) or not text[depth].isspace():
        raise MalformedHeading(text, offset)

    newline = text.find("\n")
    title_start = depth + 1
    if newline == -1:
        return depth, text[title_start:], -1
    # The whitespace after the markers may itself be the newline
    if newline < title_start:
        return depth, "", newline
    return depth, text[title_start:newline], newline


def parse_heading_line(line: str, marker: str = DEFAULT_MARKER) -> tuple[int, str]:
    """
    Parse a heading line into (depth, title).

    Depth is the number of leading marker characters. The title is
    everything after the marker run and its first whitespace character,
    up to the first newline. Raises MalformedHeading if the line does not
    start with a marker run followed by whitespace.
    """
    depth, title, _ = _split_heading(line, marker, None)
    return depth, title


def parse_block(block: str, marker: str = DEFAULT_MARKER, offset: Optional[int] = None) -> ParsedBlock:
    """
    Parse one raw block into depth, title and body.

    The body is everything after the heading line's newline, verbatim,
    or the empty string when the block is a single line.
    """
    depth, title, newline = _split_heading(block, marker, offset)
    body = block[newline + 1:] if newline != -1 else ""
    return ParsedBlock(depth=depth, title=title, body=body)
