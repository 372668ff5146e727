"""Order named locations by distance from the user."""

from __future__ import annotations

import math
from typing import Iterable, Mapping, Optional, Union

from ..core import Coordinate, NamedLocation, RankedResult
from ..utils import distance


class ProximityRanker:
    """Attach distances and sort nearest first."""

    def rank(
        self,
        user: Optional[Coordinate],
        locations: Union[Mapping[str, Coordinate], Iterable[NamedLocation]],
    ) -> RankedResult:
        if isinstance(locations, Mapping):
            named = [NamedLocation(name=name, coordinate=coordinate) for name, coordinate in locations.items()]
        else:
            named = list(locations)

        measured = [
            NamedLocation(
                name=location.name,
                coordinate=location.coordinate,
                distance_km=distance(user, location.coordinate) if user is not None else None,
            )
            for location in named
        ]
        # sorted() is stable: equal distances keep their input order.
        ranked = sorted(measured, key=_sort_key)

        nearest_name = ranked[0].name if ranked else ""
        return RankedResult(ranked_locations=ranked, nearest_name=nearest_name)


def _sort_key(location: NamedLocation) -> float:
    return location.distance_km if location.distance_km is not None else math.inf
