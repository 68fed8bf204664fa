# =============================================================================
# core/queries.py  -  One request record per api.php operation
# =============================================================================
#
# Each record holds the typed inputs for a single query kind and knows how to
# turn itself into api.php parameters.  Optional filters that were not given
# are left out of the parameters entirely (the API treats "absent" and
# "empty" differently for several of them).
#
# The shared "format=json&formatversion=2" pair is added by the client, not
# here.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Optional

CATEGORY_PREFIX = "Category:"


def normalize_category_title(category: str) -> str:
    """``"Foo"`` -> ``"Category:Foo"``; already-prefixed names pass through."""
    if category.startswith(CATEGORY_PREFIX):
        return category
    return f"{CATEGORY_PREFIX}{category}"


@dataclass(frozen=True)
class SearchQuery:
    query: str
    limit: int = 10
    namespace: Optional[int] = None

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "action": "query",
            "list": "search",
            "srsearch": self.query,
            "srlimit": self.limit,
            "srprop": "snippet|timestamp|wordcount|size",
        }
        if self.namespace is not None:
            params["srnamespace"] = self.namespace
        return params


@dataclass(frozen=True)
class PageQuery:
    """Latest revision (content + author) plus info and categories."""

    title: str

    def to_params(self) -> dict[str, Any]:
        return {
            "action": "query",
            "titles": self.title,
            "prop": "revisions|info|categories",
            "rvprop": "content|timestamp|user|comment",
            "rvslots": "main",
            "rvlimit": 1,
        }


@dataclass(frozen=True)
class ParseQuery:
    title: str

    def to_params(self) -> dict[str, Any]:
        return {"action": "parse", "page": self.title, "prop": "text"}


@dataclass(frozen=True)
class HistoryQuery:
    title: str
    limit: int = 20

    def to_params(self) -> dict[str, Any]:
        return {
            "action": "query",
            "titles": self.title,
            "prop": "revisions",
            "rvlimit": self.limit,
            "rvprop": "ids|timestamp|user|comment|size|flags",
        }


@dataclass(frozen=True)
class AllCategoriesQuery:
    prefix: Optional[str] = None
    limit: int = 20

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "action": "query",
            "list": "allcategories",
            "aclimit": self.limit,
            "acprop": "size",
        }
        if self.prefix:
            params["acprefix"] = self.prefix
        return params


@dataclass(frozen=True)
class CategoryMembersQuery:
    """``category`` may be given with or without the ``Category:`` prefix."""

    category: str
    limit: int = 50
    member_type: Optional[str] = None  # "page" | "subcat" | "file"

    @property
    def category_title(self) -> str:
        return normalize_category_title(self.category)

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "action": "query",
            "list": "categorymembers",
            "cmtitle": self.category_title,
            "cmlimit": self.limit,
            "cmprop": "ids|title|timestamp",
        }
        if self.member_type:
            params["cmtype"] = self.member_type
        return params


@dataclass(frozen=True)
class RecentChangesQuery:
    limit: int = 20
    namespace: Optional[int] = None
    change_type: Optional[str] = None  # "edit" | "new" | "log"

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {
            "action": "query",
            "list": "recentchanges",
            "rclimit": self.limit,
            "rcprop": "title|ids|sizes|flags|user|timestamp|comment",
        }
        if self.namespace is not None:
            params["rcnamespace"] = self.namespace
        if self.change_type:
            params["rctype"] = self.change_type
        return params


@dataclass(frozen=True)
class LinksQuery:
    title: str
    limit: int = 50

    def to_params(self) -> dict[str, Any]:
        return {"action": "query", "titles": self.title, "prop": "links", "pllimit": self.limit}


@dataclass(frozen=True)
class BacklinksQuery:
    title: str
    limit: int = 50

    def to_params(self) -> dict[str, Any]:
        return {"action": "query", "list": "backlinks", "bltitle": self.title, "bllimit": self.limit}
