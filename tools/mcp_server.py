# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines ALL MCP tools a client can call.  Each tool is a thin wrapper
#   around one or two MediaWikiClient calls (core/wiki_client.py) followed by
#   a renderer from tools/formatters.py.
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls a tool by name (e.g., "search_pages")
#   2. FastMCP validates the arguments against the tool's signature
#      (types, pydantic Field bounds, Literal choices).  Bad input is
#      rejected here, before any request reaches the wiki.
#   3. The handler calls the injected MediaWikiClient
#   4. The records are rendered to a single text block and returned
#
# ERRORS:
#   Handlers do not catch WikiAPIError.  FastMCP turns it into an error
#   result for that invocation.  "Nothing found" is a normal text result.
#
# TOOL NAMING CONVENTIONS:
#   - get_*    → Read-only retrieval
#   - search_* → Query with filters
#   - list_*   → Enumerate an index
#   Every tool in this server is read-only; the wiki is never modified.
#
# RUNNING THIS SERVER:
#   create_server(client) returns a ready FastMCP instance.  main.py builds
#   the client from the environment and runs it over stdio, SSE or HTTP.
# =============================================================================

import logging
import sys
from typing import Annotated, Literal, Optional

from fastmcp import FastMCP
from pydantic import Field
from starlette.requests import Request
from starlette.responses import JSONResponse

from core.wiki_client import MediaWikiClient
from tools import formatters

SERVER_NAME = "mediawiki-mcp"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because over the stdio transport the MCP protocol owns
# STDOUT.  Anything else written there corrupts the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for responses
#     - YELLOW for intermediate status/progress messages
# =============================================================================

# ANSI color codes for terminal output
_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the first line and size of the rendered text in GREEN, then return it."""
    first_line = text.split("\n", 1)[0]
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {first_line}{_RESET}")
    return text


# =============================================================================
# Input contract building blocks
# =============================================================================
# Limits are bounds-checked here (rejected, not clamped).  Integer and
# boolean inputs are strict, so a JSON boolean passed as a limit is an error
# instead of being read as 1.  The client layer forwards whatever it is given.
# =============================================================================
Namespace = Annotated[
    Optional[int],
    Field(strict=True, description="Namespace ID to search in (0=main, 1=talk, etc.)"),
]
MemberType = Literal["page", "subcat", "file"]
ChangeType = Literal["edit", "new", "log"]
LinkDirection = Literal["from", "to"]


def create_server(client: MediaWikiClient) -> FastMCP:
    """Build the FastMCP server with every wiki tool bound to ``client``.

    The client is stateless, so one instance can back every connection the
    server accepts.
    """
    mcp = FastMCP(SERVER_NAME)

    # =========================================================================
    # TOOL 1: search_pages
    # =========================================================================
    @mcp.tool(annotations={"title": "Search Wiki Pages", "readOnlyHint": True})
    async def search_pages(
        query: Annotated[str, Field(description="Search query string")],
        limit: Annotated[
            int, Field(strict=True, ge=1, le=50, description="Maximum number of results to return (1-50)")
        ] = 10,
        namespace: Namespace = None,
    ) -> str:
        """Search for pages in the MediaWiki instance using full-text search.

        Returns page titles, snippets, and metadata.
        """
        _log_request("search_pages", query=query, limit=limit, namespace=namespace)
        results = await client.search_pages(query, limit, namespace)
        _log_status(f"Found {len(results)} matches")
        return _log_response("search_pages", formatters.format_search_results(client, query, results))

    # =========================================================================
    # TOOL 2: get_page
    # =========================================================================
    # Two round-trips when include_html is set: the metadata query decides
    # whether the page exists, then action=parse supplies the HTML body.
    # =========================================================================
    @mcp.tool(annotations={"title": "Get Page Content", "readOnlyHint": True})
    async def get_page(
        title: Annotated[str, Field(description="Page title (e.g., 'Main Page')")],
        include_html: Annotated[
            bool, Field(strict=True, description="Include parsed HTML instead of wikitext")
        ] = False,
    ) -> str:
        """Retrieve the full content and metadata of a specific wiki page by title."""
        _log_request("get_page", title=title, include_html=include_html)
        page = await client.get_page(title)
        if page is None:
            _log_status("Page is missing")
            return _log_response("get_page", formatters.format_page_not_found(title))

        body = await client.get_parsed_page(title) if include_html else page.content
        return _log_response("get_page", formatters.format_page(client, page, body))

    # =========================================================================
    # TOOL 3: get_page_history
    # =========================================================================
    @mcp.tool(annotations={"title": "Get Page History", "readOnlyHint": True})
    async def get_page_history(
        title: Annotated[str, Field(description="Page title")],
        limit: Annotated[
            int, Field(strict=True, ge=1, le=50, description="Number of revisions to retrieve (1-50)")
        ] = 20,
    ) -> str:
        """Retrieve the revision history for a specific page.

        Includes timestamps, authors, edit comments and the size change of
        each revision relative to the one before it.
        """
        _log_request("get_page_history", title=title, limit=limit)
        revisions = await client.get_page_history(title, limit)
        _log_status(f"Got {len(revisions)} revisions")
        return _log_response("get_page_history", formatters.format_history(client, title, revisions))

    # =========================================================================
    # TOOL 4: list_categories
    # =========================================================================
    @mcp.tool(annotations={"title": "List Categories", "readOnlyHint": True})
    async def list_categories(
        prefix: Annotated[Optional[str], Field(description="Filter categories by name prefix")] = None,
        limit: Annotated[
            int, Field(strict=True, ge=1, le=100, description="Maximum number of categories to return (1-100)")
        ] = 20,
    ) -> str:
        """List all categories in the wiki with page counts.

        Optionally filter by category name prefix.
        """
        _log_request("list_categories", prefix=prefix, limit=limit)
        categories = await client.list_categories(prefix, limit)
        return _log_response("list_categories", formatters.format_categories(client, prefix, categories))

    # =========================================================================
    # TOOL 5: get_category_members
    # =========================================================================
    @mcp.tool(annotations={"title": "Get Category Members", "readOnlyHint": True})
    async def get_category_members(
        category: Annotated[
            str, Field(description="Category name (with or without 'Category:' prefix)")
        ],
        limit: Annotated[
            int, Field(strict=True, ge=1, le=500, description="Maximum number of members to return (1-500)")
        ] = 50,
        type: Annotated[Optional[MemberType], Field(description="Filter by member type")] = None,
    ) -> str:
        """List all pages in a specific category.

        Can filter by member type (pages, subcategories, or files).
        """
        _log_request("get_category_members", category=category, limit=limit, type=type)
        members = await client.get_category_members(category, limit, type)
        _log_status(f"Got {len(members)} members")
        return _log_response(
            "get_category_members",
            formatters.format_category_members(client, category, members, type),
        )

    # =========================================================================
    # TOOL 6: get_recent_changes
    # =========================================================================
    @mcp.tool(annotations={"title": "Get Recent Changes", "readOnlyHint": True})
    async def get_recent_changes(
        limit: Annotated[
            int, Field(strict=True, ge=1, le=50, description="Maximum number of changes to return (1-50)")
        ] = 20,
        namespace: Annotated[Optional[int], Field(strict=True, description="Filter by namespace ID")] = None,
        type: Annotated[Optional[ChangeType], Field(description="Filter by change type")] = None,
    ) -> str:
        """List recent changes across the wiki, including edits, new pages, and log events."""
        _log_request("get_recent_changes", limit=limit, namespace=namespace, type=type)
        changes = await client.get_recent_changes(limit, namespace, type)
        return _log_response("get_recent_changes", formatters.format_recent_changes(client, changes))

    # =========================================================================
    # TOOL 7: get_page_links
    # =========================================================================
    # direction="to" is the backlinks query under another name.
    # =========================================================================
    @mcp.tool(annotations={"title": "Get Page Links", "readOnlyHint": True})
    async def get_page_links(
        title: Annotated[str, Field(description="Page title")],
        direction: Annotated[
            LinkDirection,
            Field(description="Get links from this page or links to this page (backlinks)"),
        ] = "from",
        limit: Annotated[
            int, Field(strict=True, ge=1, le=500, description="Maximum number of links to return (1-500)")
        ] = 50,
    ) -> str:
        """Get all links from or to a specific page.

        Useful for understanding page connections and dependencies.
        """
        _log_request("get_page_links", title=title, direction=direction, limit=limit)
        if direction == "from":
            links = await client.get_page_links(title, limit)
        else:
            links = await client.get_backlinks(title, limit)
        _log_status(f"Got {len(links)} links")
        return _log_response("get_page_links", formatters.format_links(client, title, direction, links))

    # =========================================================================
    # Liveness route (only served by the sse / http transports)
    # =========================================================================
    @mcp.custom_route("/health", methods=["GET"])
    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "service": SERVER_NAME})

    return mcp
