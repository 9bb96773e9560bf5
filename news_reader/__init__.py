"""
news_reader

A small client for the NewsAPI v2 HTTP API that returns deduplicated, normalized articles.

Core ideas:
- Input: filters (country, category, query, sources, paging)
- Process: request → strict parse → status check → deduplicate (per session) → normalize
- Output: PageResponse with a tuple of Article

Example
-------
from news_reader import NewsClient, NewsFilters, NewsSession

client = NewsClient()          # reads NEWS_API_KEY etc. from the environment / .env
session = NewsSession()

first = client.fetch_news(NewsFilters(category="technology"), session=session)
second = client.fetch_news(NewsFilters(category="technology", page=2), session=session)
# articles already in `first` are not repeated in `second`

client.clear_seen_articles(session)   # start a new listing

for article in first.articles:
    print(client.format_date(article.published_at), article.source_name, article.title)
"""
from .config import NewsConfig
from .core import NewsClient, NewsFeed, format_date
from .exceptions import (
    ApiStatusError,
    FetchError,
    NewsClientError,
    ParseError,
    SourcesFetchError,
    StaleResponseError,
)
from .models import Article, NewsFilters, NewsSource, PageResponse, SourcesResponse
from .session import NewsSession

__all__ = [
    "Article",
    "NewsClient",
    "NewsConfig",
    "NewsFeed",
    "NewsFilters",
    "NewsSession",
    "NewsSource",
    "PageResponse",
    "SourcesResponse",
    "format_date",
    "NewsClientError",
    "FetchError",
    "ApiStatusError",
    "SourcesFetchError",
    "ParseError",
    "StaleResponseError",
]
