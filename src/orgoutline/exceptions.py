"""Custom exceptions for orgoutline."""

from typing import Optional


class OrgOutlineError(Exception):
    """Base exception for orgoutline operations."""


class ParseError(OrgOutlineError):
    """Error while parsing outline text."""


class MalformedHeading(ParseError):
    """A block or line does not start with a marker run followed by whitespace."""

    def __init__(self, text: str, offset: Optional[int] = None):
        self.text = text
        self.offset = offset
        snippet = text.split("\n", 1)[0]
        if len(snippet) > 40:
            snippet = snippet[:40] + "..."
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"Malformed heading{where}: {snippet!r}")
