from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from .exceptions import ParseError
from .models import NewsSource, RawArticle, RawPage, SourcesResponse


_FRACTION = re.compile(r"\.(\d+)")


def _opt_str(obj: Dict[str, Any], key: str, where: str) -> Optional[str]:
    val = obj.get(key)
    if val is None or isinstance(val, str):
        return val
    raise ParseError(f"{where}: field '{key}' must be a string or null, got {type(val).__name__}")


def _require_dict(payload: Any, where: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ParseError(f"{where}: expected a JSON object, got {type(payload).__name__}")
    return payload


def read_status(payload: Any) -> str:
    """Return the `status` field of a response body."""
    body = _require_dict(payload, "response")
    status = body.get("status")
    if not isinstance(status, str):
        raise ParseError("response: missing or non-string 'status'")
    return status


def parse_article(obj: Any, index: int = 0) -> RawArticle:
    where = f"articles[{index}]"
    entry = _require_dict(obj, where)

    source = entry.get("source")
    if source is not None and not isinstance(source, dict):
        raise ParseError(f"{where}: field 'source' must be an object or null")
    source_id = _opt_str(source, "id", f"{where}.source") if source else None
    source_name = _opt_str(source, "name", f"{where}.source") if source else None

    return RawArticle(
        url=_opt_str(entry, "url", where),
        title=_opt_str(entry, "title", where),
        description=_opt_str(entry, "description", where),
        content=_opt_str(entry, "content", where),
        author=_opt_str(entry, "author", where),
        url_to_image=_opt_str(entry, "urlToImage", where),
        published_at=_opt_str(entry, "publishedAt", where),
        source_id=source_id,
        source_name=source_name,
    )


def parse_page(payload: Any) -> RawPage:
    """
    Validate a top-headlines/everything body and map it to a RawPage.

    The status is read but not judged here; callers decide what a non-ok status means.
    """
    status = read_status(payload)
    total = payload.get("totalResults")
    if isinstance(total, bool) or not isinstance(total, int):
        raise ParseError("response: 'totalResults' must be an integer")
    articles = payload.get("articles")
    if not isinstance(articles, list):
        raise ParseError("response: 'articles' must be a list")

    return RawPage(
        status=status,
        total_results=total,
        articles=tuple(parse_article(a, i) for i, a in enumerate(articles)),
    )


def parse_sources(payload: Any) -> SourcesResponse:
    status = read_status(payload)
    items = payload.get("sources")
    if not isinstance(items, list):
        raise ParseError("response: 'sources' must be a list")

    sources: List[NewsSource] = []
    for i, obj in enumerate(items):
        where = f"sources[{i}]"
        entry = _require_dict(obj, where)
        sources.append(NewsSource(
            id=_opt_str(entry, "id", where),
            name=_opt_str(entry, "name", where) or "Unknown Source",
            description=_opt_str(entry, "description", where),
            url=_opt_str(entry, "url", where),
            category=_opt_str(entry, "category", where),
            language=_opt_str(entry, "language", where),
            country=_opt_str(entry, "country", where),
        ))
    return SourcesResponse(status=status, sources=tuple(sources))


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp as sent by the API (e.g. 2025-07-17T14:30:00Z).
    Returns None when the value is missing or unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    s = value.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    # fromisoformat before 3.11 only takes 3 or 6 fractional digits
    s = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s, count=1)
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None
