import pytest

from fakes import DummyHttpClient, FakeRedis, network_error
from sample_feed import SAMPLE_CSV
from puja_locator.core import FeedError
from puja_locator.services import PujaFeed, ResponseCache
from puja_locator.tasks import refresh_feed

FEED_URL = "https://sheets.example/export?format=csv"


def test_refresh_feed_repopulates_cache():
    client = DummyHttpClient()
    client.queue(FEED_URL, SAMPLE_CSV)
    redis = FakeRedis()
    redis.store["t:feed:csv"] = b"stale"
    feed = PujaFeed(FEED_URL, http_client=client, cache=ResponseCache(redis, prefix="t"))

    summary = refresh_feed(feed=feed)

    assert summary["pujas"] == 4
    assert summary["locations"] == 3
    assert "refreshed_at" in summary
    assert redis.store["t:feed:csv"].decode("utf-8") == SAMPLE_CSV


def test_refresh_feed_raises_on_failure():
    client = DummyHttpClient()
    client.queue(FEED_URL, network_error())

    with pytest.raises(FeedError):
        refresh_feed(feed=PujaFeed(FEED_URL, http_client=client))
