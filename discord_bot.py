import asyncio
import logging
import os
from typing import Dict, Iterable

import discord
from dotenv import load_dotenv

from news_reader import Article, NewsClient, NewsClientError, NewsFeed, format_date

# Load environment variables from .env
load_dotenv()

logger = logging.getLogger("discord_bot")

MAX_MESSAGE_LEN = 2000
ARTICLES_PER_MESSAGE = 5

intents = discord.Intents.default()
intents.message_content = True  # needed to read commands

client = discord.Client(intents=intents)

_news_client = None
# One feed per channel so paging in one channel does not affect another
_feeds: Dict[int, NewsFeed] = {}


def get_feed(channel_id: int) -> NewsFeed:
    global _news_client
    if _news_client is None:
        _news_client = NewsClient()
    feed = _feeds.get(channel_id)
    if feed is None:
        feed = NewsFeed(_news_client)
        _feeds[channel_id] = feed
    return feed


def render_articles(articles: Iterable[Article], header: str) -> str:
    """Format articles as a single Discord message, at most 2000 chars."""
    response = f"📰 {header}\n\n"
    for item in list(articles)[:ARTICLES_PER_MESSAGE]:
        response += f"**{item.title}**\n"
        response += f"*{item.source_name} - {format_date(item.published_at)}*\n"
        response += f"<{item.url}>\n\n"

    if len(response) > MAX_MESSAGE_LEN:
        response = response[:MAX_MESSAGE_LEN - 3] + "..."
    return response


async def handle_command(feed: NewsFeed, content: str) -> str:
    """Run one chat command against `feed` and return the reply text."""
    command, _, arg = content.strip().partition(" ")
    arg = arg.strip()

    if command == "!categories":
        return "Categories: " + ", ".join(feed.client.get_available_categories())

    if command == "!news":
        if arg:
            articles = await asyncio.to_thread(feed.filter_category, arg)
            header = f"Top {arg} headlines"
        else:
            articles = await asyncio.to_thread(feed.refresh)
            header = "Top headlines"
    elif command == "!search":
        if not arg:
            return "Usage: !search <query>"
        articles = await asyncio.to_thread(feed.search, arg)
        header = f"Results for '{arg}'"
    elif command == "!more":
        if not feed.has_more:
            return "No more articles."
        articles = await asyncio.to_thread(feed.load_more)
        header = f"Page {feed.page}"
    else:
        return ""

    if not articles:
        return "No new articles found."
    return render_articles(articles, header)


@client.event
async def on_ready():
    """Called once the bot has logged in."""
    logger.info("Logged in as %s", client.user)


@client.event
async def on_message(message):
    """Called for every message the bot can see."""
    # Ignore our own messages
    if message.author == client.user:
        return
    if not message.content.startswith("!"):
        return

    feed = get_feed(message.channel.id)
    try:
        reply = await handle_command(feed, message.content)
    except NewsClientError as e:
        logger.error("Fetching news failed: %s", e)
        await message.channel.send("Something went wrong while fetching news.")
        return

    if reply:
        await message.channel.send(reply)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    token = os.getenv("DISCORD_BOT_TOKEN")
    if not token:
        raise ValueError("DISCORD_BOT_TOKEN is not set. Check your .env file.")
    client.run(token)


if __name__ == "__main__":
    main()
