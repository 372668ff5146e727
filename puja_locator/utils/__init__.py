"""Utility helpers for the Puja Locator project."""

from .geo import distance, haversine_distance
from .formatting import format_distance, parse_float
from .io import decode_text, detect_encoding, read_text
from .network import first_forwarded_ip, is_routable_ip

__all__ = [
    "distance",
    "haversine_distance",
    "format_distance",
    "parse_float",
    "decode_text",
    "detect_encoding",
    "read_text",
    "first_forwarded_ip",
    "is_routable_ip",
]
