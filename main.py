# =============================================================================
# main.py  -  Entry Point for the MediaWiki MCP Server
# =============================================================================
#
# HOW TO RUN:
#   MEDIAWIKI_BASE_URL=https://wiki.example.org/w uv run python main.py
#   uv run python main.py --transport sse            # /sse + /health
#   uv run python main.py --transport http --port 8008
#
# WHAT HAPPENS:
#   1. Loads configuration from the environment / .env (core/config.py)
#   2. Builds ONE MediaWikiClient (core/wiki_client.py)
#   3. Builds the FastMCP server with all tools bound to that client
#      (tools/mcp_server.py)
#   4. Serves it over the chosen transport on one asyncio event loop until
#      interrupted
#
# A missing MEDIAWIKI_BASE_URL is fatal: we print a diagnostic to stderr
# and exit 1 before anything is served.
# =============================================================================

import argparse
import asyncio
import logging
import sys
from typing import Optional

from core.config import ServerSettings, load_config
from core.errors import ConfigurationError
from core.wiki_client import MediaWikiClient
from tools.mcp_server import create_server

TRANSPORTS = {
    "stdio": "stdio",
    "sse": "sse",
    "http": "streamable-http",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MediaWiki MCP Server")
    parser.add_argument(
        "--transport",
        choices=sorted(TRANSPORTS),
        default="stdio",
        help="Delivery channel (default: stdio)",
    )
    parser.add_argument("--host", help="Bind host for sse/http (default: MEDIAWIKI_MCP_HOST or localhost)")
    parser.add_argument("--port", type=int, help="Bind port for sse/http (default: MEDIAWIKI_MCP_PORT or 8009)")
    return parser


async def serve(
    settings: ServerSettings, transport: str, host: Optional[str] = None, port: Optional[int] = None
) -> None:
    """Run the server over ``transport`` until it exits.

    ``host`` and ``port`` override the configured values when given, including
    ``port=0`` (let the OS pick a free port).
    """
    logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))

    async with MediaWikiClient(settings.wiki) as client:
        mcp = create_server(client)
        logging.info(f"MediaWiki MCP server for {settings.wiki.base_url} starting on {transport}")

        if transport == "stdio":
            await mcp.run_async(transport="stdio")
        else:
            await mcp.run_async(
                transport=TRANSPORTS[transport],
                host=host if host is not None else settings.host,
                port=port if port is not None else settings.port,
            )


def run(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_config()
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    asyncio.run(serve(settings, args.transport, args.host, args.port))
    return 0


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    sys.exit(run())
