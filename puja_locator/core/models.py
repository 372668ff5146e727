"""Domain models used throughout the Puja Locator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """Return ``True`` when both values fall inside the WGS84 ranges."""

        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    def as_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True, slots=True)
class RawLocationRecord:
    """Identifier plus the untouched ``"lat,lng"`` text from the feed."""

    identifier: str
    raw_lat_lng: str


@dataclass(frozen=True, slots=True)
class NamedLocation:
    """A venue keyed by its location identifier."""

    name: str
    coordinate: Coordinate
    distance_km: float | None = None

    def as_dict(self) -> dict:
        return {
            "name": self.name,
            "latitude": self.coordinate.latitude,
            "longitude": self.coordinate.longitude,
            "distance_km": self.distance_km,
        }


@dataclass(frozen=True, slots=True)
class RankedResult:
    """Locations ordered by ascending distance from the user."""

    ranked_locations: list[NamedLocation] = field(default_factory=list)
    nearest_name: str = ""

    def as_dict(self) -> dict:
        return {
            "ranked_locations": [location.as_dict() for location in self.ranked_locations],
            "nearest_location": self.nearest_name,
        }


@dataclass(frozen=True, slots=True)
class Puja:
    """Representation of a row inside the puja listings spreadsheet."""

    id: str
    event_name: str
    sub_purpose: str
    date: str
    time: str
    venue: str
    city: str
    district: str
    state: str
    location_identifier: str
    map_location: str
    latlong: str
    registration_link: str

    COLUMNS = (
        "id",
        "event_name",
        "sub_purpose",
        "date",
        "time",
        "venue",
        "city",
        "district",
        "state",
        "location_identifier",
        "map_location",
        "latlong",
        "registration_link",
    )

    @classmethod
    def from_cells(cls, cells: Sequence[str]) -> "Puja":
        values = [cell.strip() for cell in cells[: len(cls.COLUMNS)]]
        values.extend([""] * (len(cls.COLUMNS) - len(values)))
        return cls(*values)

    @property
    def venue_details(self) -> str:
        """Venue, city, district and state joined without blanks or repeats."""

        parts: list[str] = []
        for part in (self.venue, self.city, self.district, self.state):
            if part and part not in parts:
                parts.append(part)
        return ", ".join(parts)

    def location_record(self) -> RawLocationRecord:
        return RawLocationRecord(identifier=self.location_identifier, raw_lat_lng=self.latlong)

    def as_dict(self) -> dict:
        payload = {name: getattr(self, name) for name in self.COLUMNS}
        payload["venue_details"] = self.venue_details
        return payload


@dataclass(frozen=True, slots=True)
class LocatorResult:
    """Everything the presentation layer needs for one request."""

    pujas: list[Puja]
    ranking: RankedResult
    user_location: Coordinate | None
    location_source: str

    def as_dict(self) -> dict:
        user_location: Mapping[str, object] | None = None
        if self.user_location is not None:
            user_location = {**self.user_location.as_dict(), "source": self.location_source}
        return {
            "pujas": [puja.as_dict() for puja in self.pujas],
            **self.ranking.as_dict(),
            "user_location": user_location,
        }
