"""Tool to get the section outline of an outline file."""

from typing import Optional

from ..parser import count_sections
from .common import line_count, load_document

# Deeper outlines cannot be serialized as nested JSON by the server
MAX_OUTLINE_NESTING = 200


def get_outline(
    file_path: str,
    max_depth: Optional[int] = None,
    root: Optional[str] = None,
) -> dict:
    """
    Get the hierarchical outline of a single file.

    Args:
        file_path: Path of the file, relative to the root or absolute inside it
        max_depth: Only include sections with heading depth <= this value
        root: Allowed root directory (defaults to ORGOUTLINE_ROOT or cwd)

    Returns:
        Dict with nested outline entries (no bodies)
    """
    document, rel_path, err = load_document(file_path, root)
    if err:
        return err

    outline: list[dict] = []
    pending = [
        (str(i), section, outline, 1)
        for i, section in reversed(list(enumerate(document.sections, 1)))
    ]
    while pending:
        section_id, section, siblings, level = pending.pop()
        if max_depth is not None and section.depth > max_depth:
            continue
        if level > MAX_OUTLINE_NESTING:
            return {
                "error": f"Outline nests deeper than {MAX_OUTLINE_NESTING} levels: {rel_path}",
                "file": rel_path,
            }

        node = {
            "id": section_id,
            "title": section.title,
            "depth": section.depth,
            "line_count": line_count(section),
            "children": [],
        }
        siblings.append(node)
        for i, child in reversed(list(enumerate(section.children, 1))):
            pending.append((f"{section_id}.{i}", child, node["children"], level + 1))

    return {
        "file": rel_path,
        "section_count": count_sections(document),
        "outline": outline,
    }
