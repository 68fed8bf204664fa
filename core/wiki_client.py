# =============================================================================
# core/wiki_client.py  -  MediaWiki api.php client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Owns the HTTP contract with a MediaWiki "api.php" endpoint.  One method
#   per supported query kind; each method is ONE GET request (no retries, no
#   continuation/paging) and returns typed records from core/models.py.
#
# HOW A CALL FLOWS:
#   1. The method builds a request record (core/queries.py)
#   2. _request() adds format=json&formatversion=2 and issues the GET
#   3. Transport failures and {"error": {...}} payloads become WikiAPIError
#   4. The method normalizes the response; anything the API left out becomes
#      its documented default ([] / "" / 0 / None for a missing page)
#
# STATE:
#   A MediaWikiClient holds only its config and an httpx.AsyncClient, neither
#   of which changes after construction.  Every operation is a coroutine, so
#   one instance serves overlapping tool invocations without blocking the
#   event loop; a fresh instance per invocation behaves the same.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any, Optional, Union
from urllib.parse import quote

import httpx

from core.config import WikiConfig
from core.errors import WikiAPIError
from core.models import (
    Category,
    CategoryMember,
    PageContent,
    RecentChange,
    Revision,
    SearchResult,
)
from core.queries import (
    AllCategoriesQuery,
    BacklinksQuery,
    CategoryMembersQuery,
    HistoryQuery,
    LinksQuery,
    PageQuery,
    ParseQuery,
    RecentChangesQuery,
    SearchQuery,
)

logger = logging.getLogger(__name__)

USER_AGENT = "MediaWiki-MCP/1.0.0"
REQUEST_TIMEOUT_SECONDS = 30.0

# encodeURIComponent() leaves these unescaped in addition to [A-Za-z0-9_.~-]
_URL_SAFE_CHARS = "!*'()"

Query = Union[
    SearchQuery,
    PageQuery,
    ParseQuery,
    HistoryQuery,
    AllCategoriesQuery,
    CategoryMembersQuery,
    RecentChangesQuery,
    LinksQuery,
    BacklinksQuery,
]


# =============================================================================
# Pure helpers
# =============================================================================
def page_url(base_url: str, title: str) -> str:
    """Canonical browsable URL for ``title`` under ``base_url``.

    Spaces become underscores first, then the whole title is percent-encoded:

        page_url("https://wiki.example.org", "Main Page")
        -> "https://wiki.example.org/index.php/Main_Page"
    """
    encoded = quote(title.replace(" ", "_"), safe=_URL_SAFE_CHARS)
    return f"{base_url}/index.php/{encoded}"


def format_timestamp(timestamp: str) -> str:
    """Render an ISO-8601 timestamp as e.g. ``Jan 15, 2024, 02:30 PM`` (UTC).

    Empty or unparseable input is returned unchanged.
    """
    if not timestamp:
        return timestamp
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    dt = parsed.astimezone(timezone.utc)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


def _first_page(data: dict[str, Any]) -> Optional[dict[str, Any]]:
    """First entry of query.pages, or None if the API returned no pages."""
    pages = (data.get("query") or {}).get("pages") or []
    return pages[0] if pages else None


def _remote_error_info(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if not isinstance(error, dict):
        return None
    return error.get("info") or error.get("code")


# =============================================================================
# MediaWikiClient
# =============================================================================
class MediaWikiClient:
    """Read-only client for a single wiki's api.php.

    Args:
        config: Base URL and optional bearer token.
        http_client: Optional pre-built ``httpx.AsyncClient`` (tests inject
            one backed by ``httpx.MockTransport``).  When omitted, the client
            creates and owns its own, with a 30 second timeout.
    """

    def __init__(self, config: WikiConfig, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self.config = config
        self.base_url = config.base_url
        self.api_endpoint = f"{self.base_url}/api.php"

        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if config.api_token:
            headers["Authorization"] = f"Bearer {config.api_token}"
        self._headers = headers

        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=REQUEST_TIMEOUT_SECONDS)

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "MediaWikiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------
    async def _request(self, query: Query) -> dict[str, Any]:
        """Issue one GET against api.php and return the decoded JSON body.

        Raises:
            WikiAPIError: on any transport failure, a non-JSON body, an
                ``error`` object in the response, or parameters that cannot
                be encoded into a URL (e.g. lone surrogates).  The message
                carries the wiki's own ``error.info`` when there is one.
        """
        params = {"format": "json", "formatversion": 2, **query.to_params()}
        logger.debug("GET %s %s", self.api_endpoint, params)

        try:
            response = await self._http.get(self.api_endpoint, params=params, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            try:
                info = _remote_error_info(e.response.json())
            except ValueError:
                info = None
            raise self._fail(info or str(e)) from e
        except httpx.HTTPError as e:
            raise self._fail(str(e) or type(e).__name__) from e
        except UnicodeEncodeError as e:
            raise self._fail(f"request parameters could not be encoded ({e.reason})") from e

        try:
            data = response.json()
        except ValueError as e:
            raise self._fail("response was not valid JSON") from e

        info = _remote_error_info(data)
        if info:
            raise self._fail(info)
        return data if isinstance(data, dict) else {}

    def _fail(self, detail: str) -> WikiAPIError:
        logger.warning("MediaWiki request to %s failed: %s", self.api_endpoint, detail)
        return WikiAPIError(f"MediaWiki API error: {detail}")

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------
    async def search_pages(
        self, query: str, limit: int = 10, namespace: Optional[int] = None
    ) -> list[SearchResult]:
        """Full-text search; ``limit`` and ``namespace`` are passed through as-is."""
        data = await self._request(SearchQuery(query=query, limit=limit, namespace=namespace))
        hits = (data.get("query") or {}).get("search") or []
        return [SearchResult.from_api(hit) for hit in hits]

    async def get_page(self, title: str) -> Optional[PageContent]:
        """Latest revision of ``title``, or None if the page does not exist."""
        page = _first_page(await self._request(PageQuery(title=title)))
        if page is None or page.get("missing"):
            return None
        return PageContent.from_api(page)

    async def get_parsed_page(self, title: str) -> str:
        """Rendered HTML body of ``title`` ("" if the wiki returned none)."""
        data = await self._request(ParseQuery(title=title))
        return (data.get("parse") or {}).get("text") or ""

    async def get_page_history(self, title: str, limit: int = 20) -> list[Revision]:
        """Revisions newest first, exactly as the API ordered them."""
        page = _first_page(await self._request(HistoryQuery(title=title, limit=limit)))
        if page is None:
            return []
        return [Revision.from_api(rev) for rev in page.get("revisions") or []]

    async def list_categories(self, prefix: Optional[str] = None, limit: int = 20) -> list[Category]:
        data = await self._request(AllCategoriesQuery(prefix=prefix, limit=limit))
        categories = (data.get("query") or {}).get("allcategories") or []
        return [Category.from_api(cat) for cat in categories]

    async def get_category_members(
        self, category: str, limit: int = 50, type: Optional[str] = None
    ) -> list[CategoryMember]:
        """Members of ``category``; the ``Category:`` prefix is added if missing.

        ``type`` restricts to "page", "subcat" or "file".
        """
        query = CategoryMembersQuery(category=category, limit=limit, member_type=type)
        members = ((await self._request(query)).get("query") or {}).get("categorymembers") or []
        return [CategoryMember.from_api(member) for member in members]

    async def get_recent_changes(
        self, limit: int = 20, namespace: Optional[int] = None, type: Optional[str] = None
    ) -> list[RecentChange]:
        query = RecentChangesQuery(limit=limit, namespace=namespace, change_type=type)
        changes = ((await self._request(query)).get("query") or {}).get("recentchanges") or []
        return [RecentChange.from_api(change) for change in changes]

    async def get_page_links(self, title: str, limit: int = 50) -> list[str]:
        """Titles linked FROM ``title``."""
        page = _first_page(await self._request(LinksQuery(title=title, limit=limit)))
        if page is None:
            return []
        return [link.get("title", "") for link in page.get("links") or []]

    async def get_backlinks(self, title: str, limit: int = 50) -> list[str]:
        """Titles that link TO ``title``."""
        data = await self._request(BacklinksQuery(title=title, limit=limit))
        backlinks = (data.get("query") or {}).get("backlinks") or []
        return [link.get("title", "") for link in backlinks]

    # -------------------------------------------------------------------------
    # Pure helpers bound to this wiki
    # -------------------------------------------------------------------------
    def get_page_url(self, title: str) -> str:
        return page_url(self.base_url, title)

    @staticmethod
    def format_timestamp(timestamp: str) -> str:
        return format_timestamp(timestamp)
