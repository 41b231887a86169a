"""Shared helpers for outline tools."""

import logging
from pathlib import Path
from typing import Optional

from ..exceptions import ParseError
from ..parser import Document, Section, parse
from ..security import (
    get_root,
    is_sensitive_filename,
    resolve_within_root,
    scan_content_for_secrets,
)

logger = logging.getLogger(__name__)


def line_count(section: Section) -> int:
    """Lines in the heading plus its body, children excluded."""
    body = section.body
    return 1 + body.count("\n") + (1 if body and not body.endswith("\n") else 0)


def load_document(
    file_path: str,
    root: Optional[str] = None,
) -> tuple[Optional[Document], Optional[str], Optional[dict]]:
    """
    Read and parse an outline file under the configured root.

    Returns (document, relative_path, error_dict); exactly one of
    document and error_dict is set.
    """
    base = get_root(root)
    resolved = resolve_within_root(file_path, base)
    if resolved is None:
        return None, None, {"error": f"Path is outside the allowed root: {file_path}"}

    rel_path = resolved.relative_to(base).as_posix()
    if is_sensitive_filename(rel_path):
        logger.info("Refusing sensitive file: %s", rel_path)
        return None, rel_path, {"error": f"Refusing to read sensitive file: {rel_path}"}

    if not resolved.is_file():
        return None, rel_path, {"error": f"File not found: {file_path}"}

    try:
        text = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return None, rel_path, {"error": f"Could not read {rel_path}: {e}"}

    detected = scan_content_for_secrets(text)
    if detected:
        logger.warning("Secret detected in %s: %s, refusing file", rel_path, ", ".join(detected))
        return None, rel_path, {"error": f"File contains secrets ({', '.join(detected)}): {rel_path}"}

    try:
        document = parse(text)
    except ParseError as e:
        return None, rel_path, {"error": str(e)}

    return document, rel_path, None
