# =============================================================================
# core/__init__.py
# =============================================================================
# This package talks to the wiki and models what comes back.
#
#   config.py       WikiConfig / ServerSettings, environment loading
#   errors.py       ConfigurationError, WikiAPIError
#   models.py       immutable records (SearchResult, PageContent, ...)
#   queries.py      one request record per api.php operation
#   wiki_client.py  MediaWikiClient: one GET per operation, normalized results
#
# Nothing in this package imports FastMCP.  The client can be used on its
# own from a REPL or a script.
# =============================================================================
