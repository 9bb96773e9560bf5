from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://newsapi.org/v2"

CATEGORIES = ("business", "entertainment", "general", "health", "science", "sports", "technology")
COUNTRIES = ("us", "gb", "ca", "au", "de", "fr", "it", "jp", "kr", "nl", "no", "se")
LANGUAGES = ("en", "de", "fr", "it", "nl", "no", "se")


@dataclass(frozen=True)
class NewsConfig:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    default_country: str = "us"
    default_category: str = "general"
    default_page_size: int = 20
    default_language: str = "en"
    timeout_sec: float = 10.0
    categories: Tuple[str, ...] = field(default=CATEGORIES)
    countries: Tuple[str, ...] = field(default=COUNTRIES)
    languages: Tuple[str, ...] = field(default=LANGUAGES)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "NewsConfig":
        """
        Build a config from environment variables, loading a .env file first.

        Variables already present in the environment win over the .env file.
        """
        load_dotenv(env_file)
        return cls(
            api_key=os.getenv("NEWS_API_KEY", ""),
            base_url=os.getenv("NEWS_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            default_country=os.getenv("NEWS_DEFAULT_COUNTRY", "us"),
            default_category=os.getenv("NEWS_DEFAULT_CATEGORY", "general"),
            default_page_size=int(os.getenv("NEWS_DEFAULT_PAGE_SIZE", "20")),
            default_language=os.getenv("NEWS_DEFAULT_LANGUAGE", "en"),
            timeout_sec=float(os.getenv("NEWS_API_TIMEOUT", "10")),
        )
