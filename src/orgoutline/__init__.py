"""Read org-style outline documents into section trees."""

from .exceptions import MalformedHeading, OrgOutlineError, ParseError
from .parser import Document, Section, from_file, parse, parse_heading_line

__version__ = "0.1.0"

__all__ = [
    "Document",
    "Section",
    "parse",
    "parse_heading_line",
    "from_file",
    "OrgOutlineError",
    "ParseError",
    "MalformedHeading",
]
