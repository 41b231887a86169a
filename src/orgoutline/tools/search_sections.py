"""Tool to search sections within an outline file."""

from typing import Optional

from ..parser import Section, section_ids
from .common import line_count, load_document


def score_section(section: Section, query: str) -> int:
    """Score a section against a query by title and body matches."""
    query_lower = query.lower()
    query_words = set(query_lower.split())
    score = 0

    title_lower = section.title.lower()
    if query_lower in title_lower:
        score += 10
    for word in query_words:
        if word in title_lower:
            score += 3

    body_lower = section.body.lower()
    if query_lower in body_lower:
        score += 5
    for word in query_words:
        if word in body_lower:
            score += 1

    return score


def search_sections(
    file_path: str,
    query: str,
    max_results: int = 10,
    max_depth: Optional[int] = None,
    root: Optional[str] = None,
) -> dict:
    """
    Search for sections matching a query.

    Args:
        file_path: Path of the outline file
        query: Search query (matches against titles and bodies)
        max_results: Maximum number of results to return
        max_depth: Only search sections with depth <= this value
        root: Allowed root directory (defaults to ORGOUTLINE_ROOT or cwd)

    Returns:
        Dict with matching section IDs and titles, best first
    """
    if not query.strip():
        return {"error": "Query must not be empty"}

    document, rel_path, err = load_document(file_path, root)
    if err:
        return err

    scored: list[tuple[int, str, Section]] = []
    for section_id, section in section_ids(document):
        if max_depth is not None and section.depth > max_depth:
            continue
        score = score_section(section, query)
        if score > 0:
            scored.append((score, section_id, section))

    # Stable sort keeps document order among equal scores
    scored.sort(key=lambda x: -x[0])
    scored = scored[:max_results]

    return {
        "file": rel_path,
        "query": query,
        "result_count": len(scored),
        "results": [
            {
                "id": section_id,
                "title": section.title,
                "depth": section.depth,
                "score": score,
                "line_count": line_count(section),
            }
            for score, section_id, section in scored
        ],
    }
