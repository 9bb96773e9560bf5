from __future__ import annotations

import threading
from typing import Iterable, List, Set

from .dedup import filter_unseen
from .exceptions import StaleResponseError
from .models import RawArticle


class NewsSession:
    """
    State of one logical browsing session: the URLs already handed out and a
    monotonic request token.

    Callers own sessions and pass them to the client; the client never keeps
    one between calls. A response is only accepted if its token is still the
    latest one issued, so an older request finishing late cannot leak into
    a newer listing.
    """

    def __init__(self) -> None:
        self.seen_urls: Set[str] = set()
        self._token = 0
        self._lock = threading.Lock()

    def begin_request(self) -> int:
        with self._lock:
            self._token += 1
            return self._token

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._token

    def reset(self) -> None:
        """Forget seen URLs and invalidate every request still in flight."""
        with self._lock:
            self.seen_urls.clear()
            self._token += 1

    def accept(self, token: int, articles: Iterable[RawArticle]) -> List[RawArticle]:
        """
        Deduplicate a response against this session.

        Raises StaleResponseError, leaving the seen set untouched, when a newer
        request or a reset happened after `token` was issued.
        """
        with self._lock:
            if token != self._token:
                raise StaleResponseError(f"Discarding response for request {token}; latest is {self._token}")
            return filter_unseen(articles, self.seen_urls)
