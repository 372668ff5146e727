"""Turn raw ``"lat,lng"`` spreadsheet cells into coordinates."""

from __future__ import annotations

import logging
from typing import Iterable

from ..core import Coordinate, RawLocationRecord
from ..utils import parse_float

logger = logging.getLogger(__name__)


def parse_lat_lng(raw: str | None) -> tuple[float, float] | None:
    """Parse the first two comma separated numbers in ``raw``.

    Returns ``None`` when fewer than two parts are present or either part is
    not a finite number.
    """

    if not raw:
        return None
    parts = raw.split(",")
    if len(parts) < 2:
        return None
    first = parse_float(parts[0].strip())
    second = parse_float(parts[1].strip())
    if first is None or second is None:
        return None
    return first, second


def correct_swapped_lat_lng(first: float, second: float) -> tuple[float, float]:
    """Swap the pair when the first value is numerically larger.

    Venues are all in India, where latitude (roughly 8-37) is always smaller
    than longitude (roughly 68-97). Spreadsheet rows entered as "lng,lat" are
    repaired by this rule. It is wrong for regions where that ordering does
    not hold, such as anywhere with a negative longitude.
    """

    if first > second:
        return second, first
    return first, second


class CoordinateNormalizer:
    """Build a de-duplicated, ordered ``identifier -> Coordinate`` mapping."""

    def normalize(self, records: Iterable[RawLocationRecord]) -> dict[str, Coordinate]:
        locations: dict[str, Coordinate] = {}
        for record in records:
            if not record.identifier or not record.raw_lat_lng:
                continue
            if record.identifier in locations:
                continue

            parsed = parse_lat_lng(record.raw_lat_lng)
            if parsed is None:
                logger.debug("Skipping %s: unparsable latlong %r", record.identifier, record.raw_lat_lng)
                continue

            latitude, longitude = correct_swapped_lat_lng(*parsed)
            if (latitude, longitude) != parsed:
                logger.debug("Swapped latlong for %s: %s -> %s", record.identifier, parsed, (latitude, longitude))
            locations[record.identifier] = Coordinate(latitude=latitude, longitude=longitude)
        return locations
