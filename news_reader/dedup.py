from __future__ import annotations

import logging
from typing import Iterable, List, MutableSet

from .models import RawArticle

logger = logging.getLogger(__name__)


def filter_unseen(articles: Iterable[RawArticle], seen: MutableSet[str]) -> List[RawArticle]:
    """
    Drop articles whose URL is already in `seen` and record the URLs of the rest.
    Keeps the first occurrence and preserves original order.

    Articles without a URL are always kept and never recorded, so several of them
    can survive in one page even though they all normalize to the same URL.
    """
    out: List[RawArticle] = []
    for art in articles:
        if not art.url:
            out.append(art)
            continue
        if art.url in seen:
            logger.debug("Skipping duplicate article: %s", art.title)
            continue
        seen.add(art.url)
        out.append(art)
    return out
