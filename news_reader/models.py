from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


SORT_ORDERS = ("relevancy", "popularity", "publishedAt")


@dataclass(frozen=True)
class Article:
    """
    Normalized news article returned to callers.

    `url` is the deduplication key. Textual fields always hold a value after
    normalization; `image_url` stays None when the API sent nothing.
    """
    source_id: Optional[str]
    source_name: str
    author: Optional[str]
    title: str
    description: Optional[str]
    url: str
    image_url: Optional[str]
    published_at: str
    content: Optional[str]


@dataclass(frozen=True)
class RawArticle:
    """Article exactly as the API sent it, after shape validation only."""
    url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    url_to_image: Optional[str] = None
    published_at: Optional[str] = None
    source_id: Optional[str] = None
    source_name: Optional[str] = None


@dataclass(frozen=True)
class PageResponse:
    status: str
    total_results: int
    articles: Tuple[Article, ...] = ()


@dataclass(frozen=True)
class RawPage:
    status: str
    total_results: int
    articles: Tuple[RawArticle, ...] = ()


@dataclass(frozen=True)
class NewsSource:
    id: Optional[str]
    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class SourcesResponse:
    status: str
    sources: Tuple[NewsSource, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NewsFilters:
    """
    Query filters shared by the headline and full-text endpoints.

    `sources` and `country` cannot be combined on top-headlines; when both are
    set the request keeps `sources` and drops `country`.
    """
    category: Optional[str] = None
    country: Optional[str] = None
    language: Optional[str] = None
    search_text: Optional[str] = None
    sources: Optional[str] = None
    page_size: Optional[int] = None
    page: Optional[int] = None
    sort_by: Optional[str] = None

    def __post_init__(self) -> None:
        if self.sort_by is not None and self.sort_by not in SORT_ORDERS:
            raise ValueError(f"sort_by must be one of {SORT_ORDERS}, got {self.sort_by!r}")
        if self.page is not None and self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
