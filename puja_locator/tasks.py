"""RQ task definitions for background feed refreshes."""

from __future__ import annotations

from datetime import datetime, timezone

from redis import Redis
from rq import get_current_job

from .config import FEED_CONFIG, QUEUE_CONFIG
from .core.exceptions import FeedError
from .services import CoordinateNormalizer, PujaFeed, ResponseCache, location_records, parse_pujas


def refresh_feed(*, feed: PujaFeed | None = None) -> dict:
    """Refetch the spreadsheet, bypassing and then repopulating the cache."""

    job = get_current_job()
    if job:
        job.meta["progress"] = 0
        job.save_meta()

    if feed is None:
        connection = job.connection if job else Redis.from_url(QUEUE_CONFIG.redis_url)
        feed = PujaFeed(
            FEED_CONFIG.csv_url,
            timeout=FEED_CONFIG.timeout,
            cache=ResponseCache(connection, prefix=QUEUE_CONFIG.cache_prefix),
            cache_ttl=FEED_CONFIG.cache_ttl,
        )

    try:
        text = feed.fetch_text(refresh=True)
    except FeedError as exc:
        if job:
            job.meta["error"] = exc.as_dict()
            job.save_meta()
        raise

    pujas = parse_pujas(text)
    locations = CoordinateNormalizer().normalize(location_records(pujas))

    if job:
        job.meta["progress"] = 100
        job.save_meta()

    return {
        "pujas": len(pujas),
        "locations": len(locations),
        "refreshed_at": datetime.now(timezone.utc).isoformat(),
    }
