"""Main entry point for the incremental search MCP server."""
import asyncio

from incremental_search.server import main as server_main


def run() -> None:
    asyncio.run(server_main())


if __name__ == "__main__":
    run()
