"""MCP tool implementations."""

from .list_org_files import list_org_files
from .get_outline import get_outline
from .get_section import get_section, get_sections
from .search_sections import search_sections

__all__ = ["list_org_files", "get_outline", "get_section", "get_sections", "search_sections"]
