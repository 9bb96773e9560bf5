import os
import time

import pytest

from news_reader import NewsClient, NewsConfig, NewsSession


@pytest.fixture()
def config():
    return NewsConfig(api_key="test-key", base_url="https://newsapi.example/v2")


@pytest.fixture()
def client(config):
    return NewsClient(config)


@pytest.fixture()
def session():
    return NewsSession()


@pytest.fixture()
def local_tz():
    """Switch the process time zone, e.g. local_tz("UTC"); restored afterwards."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    original = os.environ.get("TZ")

    def use(name):
        os.environ["TZ"] = name
        time.tzset()

    yield use

    if original is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = original
    time.tzset()
