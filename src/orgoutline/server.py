"""MCP Server exposing org outline navigation tools."""

import asyncio
import json
import logging
import os
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .tools.list_org_files import list_org_files as do_list_org_files
from .tools.get_outline import get_outline as do_get_outline
from .tools.get_section import get_section as do_get_section, get_sections as do_get_sections
from .tools.search_sections import search_sections as do_search_sections

LOG_LEVEL_ENV_VAR = "ORGOUTLINE_LOG_LEVEL"

logger = logging.getLogger(__name__)

# Create MCP server
server = Server("orgoutline-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="list_org_files",
            description="""List org outline files (.org) below a directory.

Respects .gitignore rules, skips sensitive files and hidden directories,
and does not follow symlinks unless asked. Paths are relative to the
configured root (ORGOUTLINE_ROOT).""",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Directory to search, relative to the root",
                        "default": ".",
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Maximum directory depth to crawl (default: 5)",
                        "default": 5,
                    },
                    "include_hidden": {
                        "type": "boolean",
                        "description": "Whether to include hidden directories (starting with .)",
                        "default": False,
                    },
                    "follow_symlinks": {
                        "type": "boolean",
                        "description": "Whether to follow symbolic links (default: false for safety)",
                        "default": False,
                    },
                },
            },
        ),
        Tool(
            name="get_outline",
            description="""Get the heading outline of one org file.

Returns section IDs, titles, depths and line counts as a nested tree,
without section bodies. Use it to find section IDs before loading content.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path of the org file (e.g. 'notes/projects.org')",
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Only include sections with heading depth <= this value",
                    },
                },
                "required": ["file_path"],
            },
        ),
        Tool(
            name="get_section",
            description="""Get the body of one section of an org file.

Section IDs come from get_outline or search_sections ("2" is the second
top-level heading, "2.1" its first child).""",
            inputSchema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path of the org file",
                    },
                    "section_id": {
                        "type": "string",
                        "description": "Dotted section ID",
                    },
                },
                "required": ["file_path", "section_id"],
            },
        ),
        Tool(
            name="get_sections",
            description="""Get the bodies of several sections of an org file at once.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path of the org file",
                    },
                    "section_ids": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "List of dotted section IDs to retrieve",
                    },
                },
                "required": ["file_path", "section_ids"],
            },
        ),
        Tool(
            name="search_sections",
            description="""Search the sections of an org file.

Matches headings and bodies; returns section IDs and titles ranked by
score, without bodies.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "file_path": {
                        "type": "string",
                        "description": "Path of the org file",
                    },
                    "query": {
                        "type": "string",
                        "description": "Search query (matches titles and bodies)",
                    },
                    "max_results": {
                        "type": "integer",
                        "description": "Maximum number of results to return",
                        "default": 10,
                    },
                    "max_depth": {
                        "type": "integer",
                        "description": "Only search sections with heading depth <= this value",
                    },
                },
                "required": ["file_path", "query"],
            },
        ),
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "list_org_files":
            result = do_list_org_files(
                path=arguments.get("path", "."),
                max_depth=arguments.get("max_depth", 5),
                include_hidden=arguments.get("include_hidden", False),
                follow_symlinks=arguments.get("follow_symlinks", False),
            )
        elif name == "get_outline":
            result = do_get_outline(
                file_path=arguments["file_path"],
                max_depth=arguments.get("max_depth"),
            )
        elif name == "get_section":
            result = do_get_section(
                file_path=arguments["file_path"],
                section_id=arguments["section_id"],
            )
        elif name == "get_sections":
            result = do_get_sections(
                file_path=arguments["file_path"],
                section_ids=arguments["section_ids"],
            )
        elif name == "search_sections":
            result = do_search_sections(
                file_path=arguments["file_path"],
                query=arguments["query"],
                max_results=arguments.get("max_results", 10),
                max_depth=arguments.get("max_depth"),
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except Exception as e:
        logger.exception("Tool %s failed", name)
        error_result = {"error": str(e)}
        return [TextContent(type="text", text=json.dumps(error_result, indent=2))]


def configure_logging() -> None:
    """Send logs to stderr; stdout carries the MCP stdio transport."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("orgoutline")
    if not package_logger.handlers:
        package_logger.addHandler(handler)
    level_name = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    try:
        package_logger.setLevel(level_name)
    except ValueError:
        package_logger.setLevel(logging.WARNING)
        logger.warning("Unknown %s value %r, using WARNING", LOG_LEVEL_ENV_VAR, level_name)


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    configure_logging()
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
