"""Formatting helpers."""

from __future__ import annotations

import math


def parse_float(value: object) -> float | None:
    """Return ``value`` as a finite float or ``None``."""

    if value in (None, "", "null"):
        return None
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def format_distance(value: float | None) -> str:
    """Return a human readable distance in kilometres."""

    if value is None:
        return "N/A"
    if value < 10:
        return f"{value:.1f} km"
    return f"{int(round(value)):,} km"
