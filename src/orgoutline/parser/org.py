"""Parse org-style outline text into a section tree."""

import logging
from pathlib import Path
from typing import Union

from .heading import parse_block
from .hierarchy import Document, build_section_tree
from .segmenter import DEFAULT_MARKER, split_blocks

logger = logging.getLogger(__name__)


def parse(text: str, marker: str = DEFAULT_MARKER) -> Document:
    """
    Parse outline text into a Document.

    Lines starting with one or more marker characters and a whitespace
    character are headings; the marker count is the heading depth. Text
    before the first heading is dropped, and text without headings gives
    an empty Document. Raises MalformedHeading if a block cannot be read
    as a heading, in which case no Document is returned.
    """
    return build_section_tree(
        parse_block(text[start:end], marker, offset=start)
        for start, end in split_blocks(text, marker)
    )


def from_file(
    path: Union[str, Path],
    encoding: str = "utf-8",
    marker: str = DEFAULT_MARKER,
) -> Document:
    """Read an outline file and parse it. I/O and decode errors propagate."""
    file_path = Path(path)
    text = file_path.read_text(encoding=encoding)
    logger.debug("Read %d characters from %s", len(text), file_path)
    return parse(text, marker)
