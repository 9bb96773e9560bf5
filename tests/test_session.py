"""
tests/test_session.py
Unit tests for news_reader/session.py and news_reader/dedup.py
"""

import pytest

from news_reader.dedup import filter_unseen
from news_reader.exceptions import StaleResponseError
from news_reader.models import RawArticle
from news_reader.session import NewsSession


def raws(*urls):
    return [RawArticle(url=u, title=f"t{i}") for i, u in enumerate(urls)]


class TestFilterUnseen:

    def test_keeps_first_occurrence_in_order(self):
        seen = set()
        out = filter_unseen(raws("https://b", "https://a", "https://b"), seen)

        assert [a.url for a in out] == ["https://b", "https://a"]
        assert seen == {"https://a", "https://b"}

    def test_drops_previously_seen(self):
        seen = {"https://a"}
        out = filter_unseen(raws("https://a", "https://c"), seen)

        assert [a.url for a in out] == ["https://c"]

    def test_missing_urls_never_recorded(self):
        seen = set()
        out = filter_unseen(raws(None, "", None), seen)

        assert len(out) == 3
        assert seen == set()


class TestNewsSession:

    def test_tokens_increase(self):
        session = NewsSession()
        first = session.begin_request()
        second = session.begin_request()

        assert second > first
        assert session.is_current(second)
        assert not session.is_current(first)

    def test_accept_records_urls(self):
        session = NewsSession()
        token = session.begin_request()

        session.accept(token, raws("https://a"))

        assert session.seen_urls == {"https://a"}

    def test_stale_token_is_rejected_without_side_effects(self):
        session = NewsSession()
        old = session.begin_request()
        session.begin_request()

        with pytest.raises(StaleResponseError):
            session.accept(old, raws("https://a"))

        assert session.seen_urls == set()

    def test_reset_clears_and_invalidates(self):
        session = NewsSession()
        token = session.begin_request()
        session.accept(token, raws("https://a"))

        session.reset()

        assert session.seen_urls == set()
        assert not session.is_current(token)
        with pytest.raises(StaleResponseError):
            session.accept(token, raws("https://b"))

    def test_reset_twice_is_harmless(self):
        session = NewsSession()
        session.reset()
        session.reset()

        token = session.begin_request()
        assert [a.url for a in session.accept(token, raws("https://a"))] == ["https://a"]
