"""Outline parsing utilities."""

from .heading import ParsedBlock, parse_block, parse_heading_line
from .hierarchy import (
    Document,
    Section,
    build_document,
    build_section_tree,
    count_sections,
    flatten_tree,
    get_section_by_id,
    get_section_path,
    iter_sections,
    section_ids,
)
from .org import from_file, parse
from .segmenter import find_heading_offsets, iter_blocks, split_blocks

__all__ = [
    "Document",
    "Section",
    "ParsedBlock",
    "parse",
    "from_file",
    "parse_heading_line",
    "parse_block",
    "build_document",
    "build_section_tree",
    "count_sections",
    "find_heading_offsets",
    "split_blocks",
    "iter_blocks",
    "flatten_tree",
    "iter_sections",
    "section_ids",
    "get_section_by_id",
    "get_section_path",
]
