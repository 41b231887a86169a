"""Build hierarchical section tree from flat heading blocks."""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from .heading import ParsedBlock, parse_block
from .segmenter import DEFAULT_MARKER


@dataclass(frozen=True)
class Section:
    """A heading, its body text and its nested sections."""
    depth: int
    title: str
    body: str = ""
    children: tuple["Section", ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"Section depth must be >= 1, got {self.depth}")

    def heading_line(self, marker: str = DEFAULT_MARKER) -> str:
        return f"{marker * self.depth} {self.title}"

    def to_text(self, marker: str = DEFAULT_MARKER) -> str:
        """Heading line and body, without the children."""
        return f"{self.heading_line(marker)}\n{self.body}"


@dataclass(frozen=True)
class Document:
    """Parse result: the ordered top-level sections."""
    sections: tuple[Section, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)


def build_section_tree(records: Iterable[ParsedBlock]) -> Document:
    """
    Nest (depth, title, body) records into a Document in one pass.

    A stack holds the open sections from shallowest to deepest. For each
    record, entries at the same or greater depth are popped; the record
    then becomes the last child of the remaining top, or a new root when
    the stack is empty. Depth gaps are kept as-is.

    Nodes live in an arena addressed by index while the tree is shaped,
    then are frozen into Sections in reverse order so every child exists
    before its parent.
    """
    depths: list[int] = []
    titles: list[str] = []
    bodies: list[str] = []
    child_ids: list[list[int]] = []
    roots: list[int] = []
    stack: list[int] = []

    for depth, title, body in records:
        idx = len(depths)
        depths.append(depth)
        titles.append(title)
        bodies.append(body)
        child_ids.append([])

        while stack and depths[stack[-1]] >= depth:
            stack.pop()

        if stack:
            child_ids[stack[-1]].append(idx)
        else:
            roots.append(idx)
        stack.append(idx)

    built: list[Optional[Section]] = [None] * len(depths)
    for idx in range(len(depths) - 1, -1, -1):
        built[idx] = Section(
            depth=depths[idx],
            title=titles[idx],
            body=bodies[idx],
            children=tuple(built[c] for c in child_ids[idx]),
        )

    return Document(sections=tuple(built[r] for r in roots))


def build_document(blocks: Iterable[str], marker: str = DEFAULT_MARKER) -> Document:
    """
    Parse raw heading blocks and nest them.

    Raises MalformedHeading if any block does not start with a heading;
    nothing is skipped.
    """
    return build_section_tree(parse_block(block, marker) for block in blocks)


def flatten_tree(sections: Iterable[Section], depth: int = 0) -> list[tuple[Section, int]]:
    """
    Flatten tree back to list with indent depth.

    Returns list of (section, indent_depth) tuples.
    """
    result: list[tuple[Section, int]] = []
    pending = [(section, depth) for section in reversed(list(sections))]
    while pending:
        section, level = pending.pop()
        result.append((section, level))
        pending.extend((child, level + 1) for child in reversed(section.children))
    return result


def iter_sections(document: Document) -> Iterator[Section]:
    """Yield every section in document order."""
    pending = list(reversed(document.sections))
    while pending:
        section = pending.pop()
        yield section
        pending.extend(reversed(section.children))


def count_sections(document: Document) -> int:
    return sum(1 for _ in iter_sections(document))


def section_ids(document: Document) -> list[tuple[str, Section]]:
    """
    Assign positional IDs to every section, in document order.

    IDs are 1-based child indexes joined by dots: "2" is the second
    top-level section, "2.1" its first child.
    """
    result: list[tuple[str, Section]] = []
    pending = [(str(i), s) for i, s in reversed(list(enumerate(document.sections, 1)))]
    while pending:
        section_id, section = pending.pop()
        result.append((section_id, section))
        for i, child in reversed(list(enumerate(section.children, 1))):
            pending.append((f"{section_id}.{i}", child))
    return result


def _parse_section_id(section_id: str) -> Optional[list[int]]:
    parts = section_id.split(".")
    if not all(p.isdecimal() for p in parts):
        return None
    indexes = [int(p) for p in parts]
    if any(i < 1 for i in indexes):
        return None
    return indexes


def get_section_by_id(document: Document, section_id: str) -> Optional[Section]:
    """Look up a section by its positional ID; None if it does not exist."""
    indexes = _parse_section_id(section_id)
    if indexes is None:
        return None

    siblings = document.sections
    section: Optional[Section] = None
    for i in indexes:
        if i > len(siblings):
            return None
        section = siblings[i - 1]
        siblings = section.children
    return section


def get_section_path(document: Document, section_id: str) -> list[str]:
    """Get the path from root to a section (list of section IDs)."""
    if get_section_by_id(document, section_id) is None:
        return []
    parts = [str(i) for i in _parse_section_id(section_id)]
    return [".".join(parts[:n]) for n in range(1, len(parts) + 1)]
