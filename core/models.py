# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of everything the wiki client hands
# back to the tool layer.  They carry no behavior.
#
# Each record is built from one API response and thrown away once the tool
# has rendered it, so all of them are frozen.
#
# FIELD NAMES:
#   The MediaWiki API uses names like "pageid", "revid", "oldlen".  We use
#   snake_case here; the mapping happens once, in the from_api() constructors,
#   which also apply the documented defaults for fields the API leaves out.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any


# -----------------------------------------------------------------------------
# SearchResult - one full-text match (list=search)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchResult:
    """One full-text search hit.

    ``snippet`` is HTML as returned by the wiki (matches wrapped in
    ``<span class="searchmatch">``); strip it before showing it to anyone.
    """

    title: str
    page_id: int
    snippet: str
    word_count: int
    size: int                          # bytes
    timestamp: str                     # ISO-8601, last modified

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "SearchResult":
        return cls(
            title=raw.get("title", ""),
            page_id=raw.get("pageid", 0),
            snippet=raw.get("snippet", ""),
            word_count=raw.get("wordcount", 0),
            size=raw.get("size", 0),
            timestamp=raw.get("timestamp", ""),
        )


# -----------------------------------------------------------------------------
# PageContent - the current text of a page plus its metadata
# -----------------------------------------------------------------------------
# Only ever built for pages that exist.  A missing page is represented by
# the client returning None, never by an "empty" PageContent.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PageContent:
    """A page's latest revision and metadata."""

    page_id: int
    title: str
    content: str                       # wikitext; "" if the revision has none
    timestamp: str
    user: str                          # last editor
    comment: str                       # last edit summary
    categories: tuple[str, ...] = field(default_factory=tuple)
    size: int = 0

    @classmethod
    def from_api(cls, page: dict[str, Any]) -> "PageContent":
        revisions = page.get("revisions") or [{}]
        revision = revisions[0]
        main_slot = (revision.get("slots") or {}).get("main") or {}
        return cls(
            page_id=page.get("pageid", 0),
            title=page.get("title", ""),
            content=main_slot.get("content") or "",
            timestamp=revision.get("timestamp", ""),
            user=revision.get("user", ""),
            comment=revision.get("comment", ""),
            categories=tuple(c.get("title", "") for c in page.get("categories") or []),
            size=page.get("length", 0),
        )


# -----------------------------------------------------------------------------
# Revision - one historical edit (prop=revisions)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Revision:
    """One edit in a page's history."""

    rev_id: int
    parent_id: int                     # 0 for the page's first revision
    timestamp: str
    user: str
    comment: str
    size: int
    minor: bool = False

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Revision":
        return cls(
            rev_id=raw.get("revid", 0),
            parent_id=raw.get("parentid", 0),
            timestamp=raw.get("timestamp", ""),
            user=raw.get("user", ""),
            comment=raw.get("comment", ""),
            size=raw.get("size", 0),
            minor=bool(raw.get("minor", False)),
        )


# -----------------------------------------------------------------------------
# Category - a category with its member counts (list=allcategories)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Category:
    """A category name (without the ``Category:`` prefix) and its counts."""

    name: str
    size: int                          # total members
    pages: int
    files: int
    subcats: int

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Category":
        return cls(
            name=raw.get("category", ""),
            size=raw.get("size", 0),
            pages=raw.get("pages", 0),
            files=raw.get("files", 0),
            subcats=raw.get("subcats", 0),
        )


@dataclass(frozen=True)
class CategoryMember:
    """A page, file or subcategory inside a category."""

    page_id: int
    title: str
    timestamp: str

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "CategoryMember":
        return cls(
            page_id=raw.get("pageid", 0),
            title=raw.get("title", ""),
            timestamp=raw.get("timestamp", ""),
        )


# -----------------------------------------------------------------------------
# RecentChange - one entry from the wiki's change log (list=recentchanges)
# -----------------------------------------------------------------------------
# old_len / new_len are always populated (0 when the API omits them, e.g. on
# some "log" entries) so callers can compute new_len - old_len unconditionally.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RecentChange:
    """One logged wiki event: an edit, a page creation or a log action."""

    type: str                          # "edit", "new", "log" (or another rc type)
    title: str
    page_id: int
    rev_id: int
    old_rev_id: int
    rc_id: int
    user: str
    timestamp: str
    comment: str
    old_len: int = 0
    new_len: int = 0

    @property
    def size_delta(self) -> int:
        return self.new_len - self.old_len

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "RecentChange":
        return cls(
            type=raw.get("type", ""),
            title=raw.get("title", ""),
            page_id=raw.get("pageid", 0),
            rev_id=raw.get("revid", 0),
            old_rev_id=raw.get("old_revid", 0),
            rc_id=raw.get("rcid", 0),
            user=raw.get("user", ""),
            timestamp=raw.get("timestamp", ""),
            comment=raw.get("comment", ""),
            old_len=raw.get("oldlen", 0),
            new_len=raw.get("newlen", 0),
        )
