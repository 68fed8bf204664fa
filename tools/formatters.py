# =============================================================================
# tools/formatters.py  -  Text rendering for every MCP tool
# =============================================================================
#
# Every tool returns ONE pre-rendered text block.  The exact wording here is
# part of the tool contract: callers (and the tests) match on it, so change
# it deliberately.
#
# These functions never call the wiki.  They only use the client's pure
# helpers (get_page_url / format_timestamp).
# =============================================================================

import re
from collections.abc import Sequence
from typing import Optional

from core.models import (
    Category,
    CategoryMember,
    PageContent,
    RecentChange,
    Revision,
    SearchResult,
)
from core.queries import CATEGORY_PREFIX, normalize_category_title
from core.wiki_client import MediaWikiClient

_HTML_TAG = re.compile(r"<[^>]*>")

NON_CONTIGUOUS_MARKER = "[non-contiguous]"


# =============================================================================
# Small helpers
# =============================================================================
def strip_html(html: str) -> str:
    """Drop every HTML tag, keep the text: ``<b>a</b> b`` -> ``a b``."""
    return _HTML_TAG.sub("", html)


def history_delta(newer: Revision, older: Optional[Revision]) -> str:
    """Size change of ``newer`` relative to the next-older revision.

    ``(+80)`` / ``(-20)`` / ``""`` for no change or no older revision.
    """
    if older is None:
        return ""
    delta = newer.size - older.size
    if delta > 0:
        return f"(+{delta})"
    if delta < 0:
        return f"({delta})"
    return ""


def is_contiguous(newer: Revision, older: Optional[Revision]) -> bool:
    """False when revisions between ``older`` and ``newer`` were not returned."""
    if older is None or not newer.parent_id:
        return True
    return newer.parent_id == older.rev_id


def change_delta(change: RecentChange) -> str:
    """``+50`` for growth, bare ``-20`` / ``0`` otherwise."""
    delta = change.size_delta
    return f"+{delta}" if delta > 0 else str(delta)


def _comment(comment: str) -> str:
    return comment or "No comment"


# =============================================================================
# Per-tool renderers
# =============================================================================
def format_search_results(client: MediaWikiClient, query: str, results: Sequence[SearchResult]) -> str:
    if not results:
        return f'No results found for "{query}"'

    text = f'Found {len(results)} results for "{query}":\n\n'
    for index, result in enumerate(results, start=1):
        text += f"{index}. **{result.title}**\n"
        text += f"   URL: {client.get_page_url(result.title)}\n"
        text += f"   Snippet: {strip_html(result.snippet)}\n"
        text += (
            f"   Size: {result.size} bytes | Words: {result.word_count} | "
            f"Modified: {client.format_timestamp(result.timestamp)}\n\n"
        )
    return text


def format_page_not_found(title: str) -> str:
    return f'Page "{title}" not found'


def format_page(client: MediaWikiClient, page: PageContent, body: str) -> str:
    """``body`` is either the wikitext or the parsed HTML, chosen by the caller."""
    categories = ", ".join(page.categories) or "None"
    return (
        f"# Page: {page.title}\n"
        f"URL: {client.get_page_url(page.title)}\n\n"
        f"## Metadata\n"
        f"- Page ID: {page.page_id}\n"
        f"- Last Modified: {client.format_timestamp(page.timestamp)} by {page.user}\n"
        f"- Categories: {categories}\n"
        f"- Size: {page.size} bytes\n"
        f"- Comment: {_comment(page.comment)}\n\n"
        f"## Content\n\n{body}"
    )


def format_history(client: MediaWikiClient, title: str, revisions: Sequence[Revision]) -> str:
    """Revisions must be newest first; each delta compares against the next entry."""
    if not revisions:
        return f'No revision history found for "{title}"'

    text = f"# Revision History: {title}\n\n## Recent Changes\n\n"
    for index, rev in enumerate(revisions):
        older = revisions[index + 1] if index + 1 < len(revisions) else None
        minor = " (minor)" if rev.minor else ""

        size_line = f"Size: {rev.size} bytes {history_delta(rev, older)}".rstrip()
        if not is_contiguous(rev, older):
            size_line += f" {NON_CONTIGUOUS_MARKER}"

        text += f"{index + 1}. [Revision {rev.rev_id}] {client.format_timestamp(rev.timestamp)}{minor}\n"
        text += f"   By: {rev.user}\n"
        text += f"   Comment: {_comment(rev.comment)}\n"
        text += f"   {size_line}\n\n"
    return text


def format_categories(client: MediaWikiClient, prefix: Optional[str], categories: Sequence[Category]) -> str:
    if not categories:
        if prefix:
            return f'No categories found starting with "{prefix}"'
        return "No categories found"

    heading = f' (prefix: "{prefix}")' if prefix else ""
    text = f"# Wiki Categories{heading}\n\n"
    for index, cat in enumerate(categories, start=1):
        text += f"{index}. **{cat.name}** ({cat.size} total members)\n"
        text += f"   URL: {client.get_page_url(CATEGORY_PREFIX + cat.name)}\n"
        text += f"   Pages: {cat.pages} | Files: {cat.files} | Subcategories: {cat.subcats}\n\n"
    return text


def format_category_members(
    client: MediaWikiClient,
    category: str,
    members: Sequence[CategoryMember],
    member_type: Optional[str] = None,
) -> str:
    if not members:
        return f'No members found in category "{category}"'

    type_note = f" (type: {member_type})" if member_type else ""
    text = f"# Category: {normalize_category_title(category)}\n"
    text += f"Total members: {len(members)}{type_note}\n\n"
    text += "## Members\n\n"
    for index, member in enumerate(members, start=1):
        text += f"{index}. **{member.title}**\n"
        text += f"   URL: {client.get_page_url(member.title)}\n"
        text += f"   Last modified: {client.format_timestamp(member.timestamp)}\n\n"
    return text


def format_recent_changes(client: MediaWikiClient, changes: Sequence[RecentChange]) -> str:
    if not changes:
        return "No recent changes found"

    text = "# Recent Changes\n\n"
    for index, change in enumerate(changes, start=1):
        text += (
            f"{index}. [{change.type.upper()}] **{change.title}** - "
            f"{client.format_timestamp(change.timestamp)}\n"
        )
        text += f"   By: {change.user}\n"
        text += f"   Comment: {_comment(change.comment)}\n"
        text += f"   Size change: {change_delta(change)} bytes\n"
        text += f"   URL: {client.get_page_url(change.title)}\n\n"
    return text


def format_links(client: MediaWikiClient, title: str, direction: str, links: Sequence[str]) -> str:
    """``direction`` is "from" (outgoing links) or "to" (backlinks)."""
    outgoing = direction == "from"
    if not links:
        if outgoing:
            return f'No outgoing links found from "{title}"'
        return f'No backlinks found to "{title}"'

    if outgoing:
        text = f"# Links from: {title}\n\nFound {len(links)} outgoing links:\n\n"
    else:
        text = f"# Links to: {title}\n\nFound {len(links)} backlinks:\n\n"
    for index, link in enumerate(links, start=1):
        text += f"{index}. **{link}**\n"
        text += f"   URL: {client.get_page_url(link)}\n\n"
    return text
