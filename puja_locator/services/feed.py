"""Puja spreadsheet ingestion."""

from __future__ import annotations

import csv
import io
import logging
import os
from typing import Iterable, Optional

from ..core import FeedError, Puja, RawLocationRecord
from ..utils import decode_text, read_text
from .cache import ResponseCache
from .http_client import TRANSPORT_ERRORS, HTTPClient

logger = logging.getLogger(__name__)

CACHE_KEY = "feed:csv"


def parse_pujas(text: str) -> list[Puja]:
    """Parse CSV text into :class:`Puja` rows.

    The first row is the header. Columns are mapped by position; rows shorter
    than the header or without an id are skipped.
    """

    reader = csv.reader(io.StringIO(text.strip()))
    header = next(reader, None)
    if not header:
        return []
    width = len(header)
    # A trailing comma on the header line yields an empty last column name.
    if width > 1 and not header[-1].strip():
        width -= 1

    pujas: list[Puja] = []
    skipped = 0
    for cells in reader:
        if not any(cell.strip() for cell in cells):
            continue
        if len(cells) < width or not cells[0].strip():
            skipped += 1
            continue
        pujas.append(Puja.from_cells(cells))

    if skipped:
        logger.info("Skipped %d malformed puja rows", skipped)
    return pujas


def location_records(pujas: Iterable[Puja]) -> list[RawLocationRecord]:
    return [puja.location_record() for puja in pujas]


def read_local_feed(path: os.PathLike[str] | str) -> list[Puja]:
    """Load pujas from a CSV file on disk."""

    try:
        text = read_text(path)
    except OSError as exc:
        raise FeedError(f"CSV file could not be read: {path}", details={"path": str(path)}) from exc
    return parse_pujas(text)


class PujaFeed:
    """Fetch the published spreadsheet, caching the CSV text in Redis."""

    def __init__(
        self,
        url: str,
        *,
        http_client: Optional[HTTPClient] = None,
        timeout: float = 10,
        cache: Optional[ResponseCache] = None,
        cache_ttl: int = 600,
    ):
        self.url = url
        self.http_client = http_client or HTTPClient()
        self.timeout = timeout
        self.cache = cache
        self.cache_ttl = cache_ttl

    def fetch_text(self, *, refresh: bool = False) -> str:
        """Return the CSV text, from cache unless ``refresh`` is set."""

        if self.cache is not None and not refresh:
            cached = self.cache.get(CACHE_KEY)
            if cached is not None:
                return cached

        try:
            raw, charset = self.http_client.get_bytes(self.url, {}, self.timeout)
        except TRANSPORT_ERRORS as exc:
            raise FeedError("Failed to fetch puja data", details={"reason": str(exc)}) from exc

        text = decode_text(raw, charset)
        if self.cache is not None:
            self.cache.set(CACHE_KEY, text, self.cache_ttl)
        return text

    def load(self, *, refresh: bool = False) -> list[Puja]:
        """Return the current pujas, or an empty list when the feed is down."""

        try:
            text = self.fetch_text(refresh=refresh)
        except FeedError as exc:
            logger.error("Error fetching puja feed: %s", exc.as_dict())
            return []
        return parse_pujas(text)
