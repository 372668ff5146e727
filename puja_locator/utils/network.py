"""Client address helpers."""

from __future__ import annotations

import ipaddress


def is_routable_ip(value: str | None) -> bool:
    """Return ``True`` for a syntactically valid, publicly routable address.

    Loopback, private, link-local, reserved and unparsable values are all
    considered non-routable; geolocation services cannot place them.
    """

    if not value:
        return False
    try:
        address = ipaddress.ip_address(value.strip())
    except ValueError:
        return False
    mapped = getattr(address, "ipv4_mapped", None)
    if mapped is not None:
        address = mapped
    return address.is_global and not address.is_multicast


def first_forwarded_ip(header_value: str | None) -> str | None:
    """Return the left-most entry of an ``X-Forwarded-For`` header."""

    if not header_value:
        return None
    first = header_value.split(",")[0].strip()
    return first or None
