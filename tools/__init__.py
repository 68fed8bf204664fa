# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool catalog.
#
#   mcp_server.py   create_server(client): seven read-only tools + /health
#   formatters.py   deterministic text rendering for each tool
#
# Tools translate validated MCP arguments into MediaWikiClient calls and the
# resulting records into one text block.  They hold no state of their own;
# the client is injected.
# =============================================================================
