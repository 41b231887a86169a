"""Tool to get a specific section's content."""

from typing import Optional

from ..parser import Document, get_section_by_id, get_section_path
from .common import line_count, load_document


def _section_result(document: Document, rel_path: str, section_id: str) -> dict:
    """Build the response for one section ID of an already loaded document."""
    section = get_section_by_id(document, section_id)
    if section is None:
        return {"error": f"Section not found: {section_id}"}

    return {
        "id": section_id,
        "file": rel_path,
        "title": section.title,
        "depth": section.depth,
        "heading": section.heading_line(),
        "line_count": line_count(section),
        "path": get_section_path(document, section_id),
        "children": [f"{section_id}.{i}" for i in range(1, len(section.children) + 1)],
        "body": section.body,
    }


def get_section(
    file_path: str,
    section_id: str,
    root: Optional[str] = None,
) -> dict:
    """
    Get the full content of a specific section.

    Args:
        file_path: Path of the outline file
        section_id: Dotted positional ID from get_outline (e.g. "2.1")
        root: Allowed root directory (defaults to ORGOUTLINE_ROOT or cwd)

    Returns:
        Dict with section body and metadata
    """
    document, rel_path, err = load_document(file_path, root)
    if err:
        return err
    return _section_result(document, rel_path, section_id)


def get_sections(
    file_path: str,
    section_ids: list[str],
    root: Optional[str] = None,
) -> dict:
    """
    Get the full content of multiple sections.

    The file is read and parsed once, so every section comes from the
    same version of it.

    Returns:
        Dict with sections content and any errors
    """
    document, rel_path, err = load_document(file_path, root)
    if err:
        return err

    results = []
    errors = []

    for section_id in section_ids:
        result = _section_result(document, rel_path, section_id)
        if "error" in result:
            errors.append({"id": section_id, "error": result["error"]})
        else:
            results.append(result)

    return {
        "sections": results,
        "errors": errors if errors else None,
    }
