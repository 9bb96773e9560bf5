from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from .config import NewsConfig
from .exceptions import ApiStatusError, SourcesFetchError, StaleResponseError
from .fetcher import get_json
from .models import Article, NewsFilters, PageResponse, SourcesResponse
from .normalizer import transform_articles
from .parser import parse_page, parse_sources, parse_timestamp, read_status
from .session import NewsSession

logger = logging.getLogger(__name__)

UNKNOWN_DATE = "Unknown date"
DEFAULT_QUERY = "news"
DEFAULT_SORT = "publishedAt"
MAX_PAGE_SIZE = 100


def format_date(value: Optional[str]) -> str:
    """
    Render an API timestamp in local time, like "Jul 17, 2025, 02:30 PM".
    Timestamps without an offset are shown as given.
    Returns "Unknown date" instead of raising when the value cannot be parsed.
    """
    dt = parse_timestamp(value)
    if dt is None:
        return UNKNOWN_DATE
    if dt.tzinfo is not None:
        try:
            dt = dt.astimezone()
        except (OverflowError, OSError, ValueError):
            pass
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"


class NewsClient:
    """
    Client for the NewsAPI v2 endpoints.

    Pipeline per call: build params → GET → parse → status check → deduplicate
    (against the caller's session) → normalize.

    The client holds configuration only. Deduplication state lives in the
    NewsSession passed to each call; without one, a call deduplicates within
    its own response and nothing is remembered.
    """

    def __init__(self, config: Optional[NewsConfig] = None) -> None:
        self.config = config or NewsConfig.from_env()

    # Request building

    def effective_page_size(self, filters: NewsFilters) -> int:
        size = filters.page_size
        if size is not None and 0 < size <= MAX_PAGE_SIZE:
            return size
        return self.config.default_page_size

    def _base_params(self) -> Dict[str, Any]:
        return {"apiKey": self.config.api_key}

    def build_headlines_params(self, filters: NewsFilters) -> Dict[str, Any]:
        params = self._base_params()
        if filters.sources:
            # The API rejects country together with sources
            params["sources"] = filters.sources
        else:
            params["country"] = filters.country or self.config.default_country
        if filters.category:
            params["category"] = filters.category
        if filters.search_text:
            params["q"] = filters.search_text
        params["pageSize"] = self.effective_page_size(filters)
        if filters.page:
            params["page"] = filters.page
        return params

    def build_everything_params(self, filters: NewsFilters) -> Dict[str, Any]:
        params = self._base_params()
        params["q"] = filters.search_text or DEFAULT_QUERY
        if filters.sources:
            params["sources"] = filters.sources
        params["language"] = filters.language or self.config.default_language
        params["sortBy"] = filters.sort_by or DEFAULT_SORT
        params["pageSize"] = self.effective_page_size(filters)
        if filters.page:
            params["page"] = filters.page
        return params

    # Fetching

    def _fetch_page(self, endpoint: str, params: Dict[str, Any], session: Optional[NewsSession]) -> PageResponse:
        session = session or NewsSession()
        token = session.begin_request()

        payload = get_json(f"{self.config.base_url}/{endpoint}", params, timeout=self.config.timeout_sec)
        status = read_status(payload)
        if status != "ok":
            raise ApiStatusError(
                f"API returned error status: {status} ({payload.get('message', 'no message')})",
                status=status,
                code=payload.get("code"),
            )
        page = parse_page(payload)
        logger.info("%s: %d total results, %d articles in page", endpoint, page.total_results, len(page.articles))

        unique = session.accept(token, page.articles)
        logger.debug("Unique articles after deduplication: %d", len(unique))

        return PageResponse(
            status=page.status,
            total_results=page.total_results,
            articles=tuple(transform_articles(unique)),
        )

    def fetch_top_headlines(self, filters: Optional[NewsFilters] = None, *, session: Optional[NewsSession] = None) -> PageResponse:
        return self._fetch_page("top-headlines", self.build_headlines_params(filters or NewsFilters()), session)

    def fetch_everything(self, filters: Optional[NewsFilters] = None, *, session: Optional[NewsSession] = None) -> PageResponse:
        return self._fetch_page("everything", self.build_everything_params(filters or NewsFilters()), session)

    def fetch_news(self, filters: Optional[NewsFilters] = None, *, session: Optional[NewsSession] = None) -> PageResponse:
        """Full-text search when `search_text` has content, top headlines otherwise."""
        filters = filters or NewsFilters()
        query = (filters.search_text or "").strip()
        if query:
            return self.fetch_everything(replace(filters, search_text=query), session=session)
        return self.fetch_top_headlines(filters, session=session)

    def search_news(self, query: str, filters: Optional[NewsFilters] = None, *, session: Optional[NewsSession] = None) -> PageResponse:
        filters = replace(filters or NewsFilters(), search_text=query.strip(), sort_by="relevancy")
        return self.fetch_everything(filters, session=session)

    def fetch_news_by_category(self, category: str, filters: Optional[NewsFilters] = None, *, session: Optional[NewsSession] = None) -> PageResponse:
        filters = replace(filters or NewsFilters(), category=category)
        return self.fetch_top_headlines(filters, session=session)

    def fetch_sources(
        self,
        *,
        category: Optional[str] = None,
        language: Optional[str] = None,
        country: Optional[str] = None,
    ) -> SourcesResponse:
        params = self._base_params()
        if category:
            params["category"] = category
        if language:
            params["language"] = language
        if country:
            params["country"] = country

        payload = get_json(
            f"{self.config.base_url}/sources", params,
            timeout=self.config.timeout_sec, check_status=False,
        )
        status = read_status(payload)
        if status != "ok":
            raise SourcesFetchError(f"Failed to fetch sources: {status}", status=status, code=payload.get("code"))
        return parse_sources(payload)

    # Session and helpers

    @staticmethod
    def clear_seen_articles(session: NewsSession) -> None:
        session.reset()

    @staticmethod
    def format_date(value: Optional[str]) -> str:
        return format_date(value)

    def get_available_categories(self) -> List[str]:
        return list(self.config.categories)

    def get_available_countries(self) -> List[str]:
        return list(self.config.countries)

    def get_available_languages(self) -> List[str]:
        return list(self.config.languages)


class NewsFeed:
    """
    Paged view over one listing, search, or category, backed by its own session.

    refresh/search/filter_category start a new session at page 1; load_more
    fetches the next page of the same listing, still deduplicating against
    everything already shown.

    Methods may be called from worker threads. A result is applied only if no
    other load started on this feed after it was issued; otherwise it is dropped
    and the feed keeps the newer state.
    """

    LISTING = "listing"
    SEARCH = "search"
    CATEGORY = "category"

    def __init__(self, client: NewsClient, *, filters: Optional[NewsFilters] = None) -> None:
        self.client = client
        self.session = NewsSession()
        self.filters = filters or NewsFilters()
        self.mode = self.LISTING
        self.query = ""
        self.category: Optional[str] = None
        self.page = 0
        self.total_results = 0
        self.articles: List[Article] = []
        self._lock = threading.Lock()
        self._ticket = 0

    @property
    def page_size(self) -> int:
        return self.client.effective_page_size(self.filters)

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total_results

    def _request(self, mode: str, arg: str, filters: NewsFilters) -> PageResponse:
        if mode == self.SEARCH:
            return self.client.search_news(arg, filters, session=self.session)
        if mode == self.CATEGORY:
            return self.client.fetch_news_by_category(arg, filters, session=self.session)
        return self.client.fetch_news(filters, session=self.session)

    def _issue(self, page: int) -> Tuple[int, str, str, NewsFilters]:
        # caller holds self._lock
        self._ticket += 1
        arg = self.query if self.mode == self.SEARCH else (self.category or "")
        return self._ticket, self.mode, arg, replace(self.filters, page=page)

    def _start(self, mode: str) -> List[Article]:
        with self._lock:
            self.mode = mode
            self.client.clear_seen_articles(self.session)
            self.page = 0
            self.total_results = 0
            self.articles = []
            request = self._issue(1)
        return self._load(1, *request)

    def _load(self, page: int, ticket: int, mode: str, arg: str, filters: NewsFilters) -> List[Article]:
        try:
            resp = self._request(mode, arg, filters)
        except StaleResponseError as e:
            logger.info("%s", e)
            return []
        with self._lock:
            if ticket != self._ticket:
                logger.info("Discarding page %d of %s; a newer load started", page, mode)
                return []
            self.page = page
            self.total_results = resp.total_results
            self.articles.extend(resp.articles)
        return list(resp.articles)

    def refresh(self, filters: Optional[NewsFilters] = None) -> List[Article]:
        if filters is not None:
            self.filters = filters
        return self._start(self.LISTING)

    def search(self, query: str) -> List[Article]:
        self.query = query
        return self._start(self.SEARCH)

    def filter_category(self, category: Optional[str] = None) -> List[Article]:
        """Top headlines for `category`, or the configured default category."""
        self.category = category or self.client.config.default_category
        return self._start(self.CATEGORY)

    def load_more(self) -> List[Article]:
        with self._lock:
            if not self.has_more:
                return []
            page = self.page + 1
            request = self._issue(page)
        return self._load(page, *request)
