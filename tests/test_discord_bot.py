"""
tests/test_discord_bot.py
Unit tests for the command handling and formatting in discord_bot.py
"""

import asyncio
from unittest.mock import MagicMock

import pytest

import discord_bot
from news_reader.models import Article


def make_article(n, **overrides):
    data = dict(
        source_id=None, source_name="BBC News", author="A", title=f"Title {n}",
        description="D", url=f"https://example.com/{n}", image_url=None,
        published_at="2025-07-17T14:30:00Z", content="C",
    )
    data.update(overrides)
    return Article(**data)


@pytest.fixture()
def feed():
    f = MagicMock()
    f.client.get_available_categories.return_value = ["business", "sports"]
    f.refresh.return_value = [make_article(1)]
    f.search.return_value = [make_article(2)]
    f.filter_category.return_value = [make_article(3)]
    f.load_more.return_value = [make_article(4)]
    f.has_more = True
    f.page = 2
    return f


def run(feed, text):
    return asyncio.run(discord_bot.handle_command(feed, text))


class TestRenderArticles:

    def test_contains_title_source_date_and_link(self, local_tz):
        local_tz("UTC")
        text = discord_bot.render_articles([make_article(1)], "Top headlines")

        assert text.startswith("📰 Top headlines")
        assert "**Title 1**" in text
        assert "*BBC News - Jul 17, 2025, 02:30 PM*" in text
        assert "<https://example.com/1>" in text

    def test_limits_number_of_articles(self):
        text = discord_bot.render_articles([make_article(i) for i in range(10)], "x")

        assert text.count("**Title") == discord_bot.ARTICLES_PER_MESSAGE

    def test_message_is_truncated(self):
        long_title = "y" * 3000
        text = discord_bot.render_articles([make_article(1, title=long_title)], "x")

        assert len(text) == discord_bot.MAX_MESSAGE_LEN
        assert text.endswith("...")


class TestHandleCommand:

    def test_news_refreshes(self, feed):
        reply = run(feed, "!news")

        feed.refresh.assert_called_once_with()
        assert "Title 1" in reply

    def test_news_with_category(self, feed):
        reply = run(feed, "!news sports")

        feed.filter_category.assert_called_once_with("sports")
        assert "Top sports headlines" in reply

    def test_search(self, feed):
        reply = run(feed, "!search  climate change ")

        feed.search.assert_called_once_with("climate change")
        assert "Title 2" in reply

    def test_search_requires_query(self, feed):
        assert run(feed, "!search").startswith("Usage")
        feed.search.assert_not_called()

    def test_more(self, feed):
        reply = run(feed, "!more")

        feed.load_more.assert_called_once_with()
        assert "Page 2" in reply

    def test_more_when_exhausted(self, feed):
        feed.has_more = False

        assert run(feed, "!more") == "No more articles."
        feed.load_more.assert_not_called()

    def test_empty_result(self, feed):
        feed.refresh.return_value = []

        assert run(feed, "!news") == "No new articles found."

    def test_categories(self, feed):
        assert run(feed, "!categories") == "Categories: business, sports"

    def test_unknown_command_is_ignored(self, feed):
        assert run(feed, "!weather") == ""


class TestGetFeed:

    def test_one_feed_per_channel(self, monkeypatch):
        monkeypatch.setattr(discord_bot, "_feeds", {})
        monkeypatch.setattr(discord_bot, "_news_client", MagicMock())

        first = discord_bot.get_feed(1)

        assert discord_bot.get_feed(1) is first
        assert discord_bot.get_feed(2) is not first
