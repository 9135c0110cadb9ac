"""MCP server exposing the incremental search engine over a JSON record file."""
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from incremental_search.config import get_config, get_search_config
from incremental_search.filters import filter_and_rank, generate_suggestions, highlight_matches
from incremental_search.records import read_records


# Global state
_records_cache: Optional[List[Dict[str, Any]]] = None


def load_records(records_path: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Load records, using cache if available.

    Args:
        records_path: Optional path to the records file (defaults to config)

    Returns:
        List of records, empty if the file can't be read
    """
    global _records_cache

    if _records_cache is None:
        path = records_path or get_config().records_path
        if path is None:
            print("[SearchServer] Warning: SEARCH_RECORDS_PATH is not set", file=sys.stderr)
            return []
        try:
            _records_cache = read_records(path)
        except FileNotFoundError as e:
            print(f"[SearchServer] Warning: Could not find records file: {e}", file=sys.stderr)
            _records_cache = []
        except (json.JSONDecodeError, ValueError) as e:
            print(f"[SearchServer] Error loading records: {e}", file=sys.stderr)
            _records_cache = []

    return _records_cache


def reload_records() -> None:
    """Drop the cached records so the next call re-reads the file."""
    global _records_cache
    _records_cache = None


def _text(text: str) -> List[TextContent]:
    return [TextContent(type="text", text=text)]


async def search_records_tool(query: str, limit: Optional[int] = None) -> list[TextContent]:
    """Tool handler for search_records.

    Args:
        query: Search query string (blank lists every record)
        limit: Maximum number of records to return (defaults to config)

    Returns:
        List of TextContent with ranked records as JSON
    """
    config = get_config()
    search_config = get_search_config()
    records = load_records()

    if not records:
        return _text("No records available. Please set SEARCH_RECORDS_PATH to a JSON file.")

    results = filter_and_rank(records, query, search_config.fields)

    if not results:
        return _text(f"No records found matching query: {query}")

    results = results[:limit or config.result_limit]
    payload = [
        {**record, "highlighted": highlight_matches(search_config.get_label(record), query)}
        for record in results
    ]

    return _text(json.dumps(payload, indent=2))


async def suggest_records_tool(query: str) -> list[TextContent]:
    """Tool handler for suggest_records.

    Args:
        query: Partial query as typed so far

    Returns:
        List of TextContent with top suggestions as JSON
    """
    search_config = get_search_config()
    records = load_records()

    suggestions = generate_suggestions(
        records, query, search_config.fields, search_config.max_suggestions
    )
    payload = []
    for record in suggestions:
        label = search_config.get_label(record)
        payload.append({
            "key": search_config.get_key(record),
            "label": label,
            "highlighted": highlight_matches(label, query),
        })

    return _text(json.dumps(payload, indent=2))


async def highlight_text_tool(text: str, query: str) -> list[TextContent]:
    """Tool handler for highlight_text."""
    return _text(highlight_matches(text, query))


def create_server() -> Server:
    """Create and configure the MCP server.

    Returns:
        Configured Server instance
    """
    server = Server("incremental-search-mcp")

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return [
            Tool(
                name="search_records",
                description="Search the loaded records. Every query word must match some searched field; results are ranked by match strength (prefix of field > prefix of a word > substring).",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Search query; blank returns records unfiltered"
                        },
                        "limit": {
                            "type": "integer",
                            "description": "Maximum number of records to return",
                            "minimum": 1
                        }
                    },
                    "required": ["query"]
                }
            ),
            Tool(
                name="suggest_records",
                description="Return the top few suggestions (key, label, highlighted label) for a partially typed query.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "query": {
                            "type": "string",
                            "description": "Partial query as typed so far"
                        }
                    },
                    "required": ["query"]
                }
            ),
            Tool(
                name="highlight_text",
                description="Wrap every occurrence of the query words in text with <mark> tags.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        "text": {"type": "string", "description": "Text to highlight"},
                        "query": {"type": "string", "description": "Search query"}
                    },
                    "required": ["text", "query"]
                }
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Any) -> list[TextContent]:
        """Handle tool calls."""
        arguments = arguments or {}

        if name == "search_records":
            limit = arguments.get("limit")
            if limit is not None and (not isinstance(limit, int) or limit < 1):
                return _text("Error: 'limit' must be a positive integer")
            return await search_records_tool(arguments.get("query", ""), limit)
        elif name == "suggest_records":
            return await suggest_records_tool(arguments.get("query", ""))
        elif name == "highlight_text":
            text = arguments.get("text", "")
            if not text:
                return _text("Error: 'text' parameter is required")
            return await highlight_text_tool(text, arguments.get("query", ""))
        else:
            raise ValueError(f"Unknown tool: {name}")

    return server


async def main():
    """Main entry point for the MCP server."""
    # Reject invalid engine settings before serving any request
    get_search_config()
    server = create_server()

    async with stdio_server() as (read_stream, write_stream):
        initialization_options = server.create_initialization_options()
        await server.run(read_stream, write_stream, initialization_options)
