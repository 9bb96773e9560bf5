from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List

from .models import Article, RawArticle


UNTITLED = "Untitled Article"
NO_DESCRIPTION = "No description available."
NO_CONTENT = "No content available."
UNKNOWN_SOURCE = "Unknown Source"
UNKNOWN_AUTHOR = "Unknown Author"
MISSING_URL = "#"


def _now_iso() -> str:
    # Same shape the API uses: 2025-07-17T14:30:00.000Z
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_article(raw: RawArticle) -> Article:
    """
    Convert a RawArticle into an Article, replacing empty fields with fallbacks.
    Content falls back to the raw description before its own placeholder.
    """
    return Article(
        source_id=raw.source_id or None,
        source_name=raw.source_name or UNKNOWN_SOURCE,
        author=raw.author or UNKNOWN_AUTHOR,
        title=raw.title or UNTITLED,
        description=raw.description or NO_DESCRIPTION,
        url=raw.url or MISSING_URL,
        image_url=raw.url_to_image or None,
        published_at=raw.published_at or _now_iso(),
        content=raw.content or raw.description or NO_CONTENT,
    )


def transform_articles(articles: Iterable[RawArticle]) -> List[Article]:
    return [to_article(a) for a in articles]
