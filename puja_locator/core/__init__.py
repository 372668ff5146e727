"""Core domain primitives for the Puja Locator."""

from .models import (
    Coordinate,
    LocatorResult,
    NamedLocation,
    Puja,
    RankedResult,
    RawLocationRecord,
)
from .exceptions import FeedError, LocatorError

__all__ = [
    "Coordinate",
    "LocatorResult",
    "NamedLocation",
    "Puja",
    "RankedResult",
    "RawLocationRecord",
    "FeedError",
    "LocatorError",
]
