"""IP geolocation provider adapters."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, Mapping, Optional
from urllib import parse as urllib_parse

from ..core import Coordinate
from ..utils import parse_float
from .http_client import TRANSPORT_ERRORS, HTTPClient

logger = logging.getLogger(__name__)


class GeoProvider(ABC):
    """Resolve an IP address to a coordinate, failing soft.

    Subclasses describe one external service: where to send the request and
    how to read the answer. :meth:`locate` turns every failure into ``None``.
    """

    name: str = "provider"

    def __init__(self, http_client: Optional[HTTPClient] = None, timeout: float = 5.0):
        self.http_client = http_client or HTTPClient()
        self.timeout = timeout

    def locate(self, ip: str) -> Optional[Coordinate]:
        try:
            payload = self.http_client.get_json(self.url_for(ip), self.params(), self.timeout)
        except TRANSPORT_ERRORS as exc:
            logger.warning("%s lookup failed: %s", self.name, exc)
            return None

        if not isinstance(payload, Mapping):
            logger.warning("%s returned an unexpected payload type %s", self.name, type(payload).__name__)
            return None

        coordinate = self.parse(payload)
        if coordinate is None:
            logger.warning("%s returned no usable coordinate", self.name)
            return None
        if not coordinate.is_valid():
            logger.warning("%s returned an out of range coordinate %s", self.name, coordinate)
            return None
        return coordinate

    @abstractmethod
    def url_for(self, ip: str) -> str:
        """Return the lookup URL for ``ip``."""

    def params(self) -> Dict[str, object]:
        return {}

    @abstractmethod
    def parse(self, payload: Mapping[str, object]) -> Optional[Coordinate]:
        """Extract a coordinate from a decoded JSON payload."""

    @staticmethod
    def _coordinate(latitude: object, longitude: object) -> Optional[Coordinate]:
        lat = parse_float(latitude)
        lng = parse_float(longitude)
        if lat is None or lng is None:
            return None
        return Coordinate(latitude=lat, longitude=lng)


class IpWhoIsProvider(GeoProvider):
    """https://ipwho.is — free, no key."""

    name = "ipwho.is"
    base_url = "http://ipwho.is/"

    def url_for(self, ip: str) -> str:
        return self.base_url + urllib_parse.quote(ip, safe=":.")

    def parse(self, payload: Mapping[str, object]) -> Optional[Coordinate]:
        if payload.get("success") is not True:
            return None
        return self._coordinate(payload.get("latitude"), payload.get("longitude"))


class IpApiComProvider(GeoProvider):
    """https://ipapi.com — requires an access key."""

    name = "ipapi.com"
    base_url = "https://api.ipapi.com/api/"

    def __init__(self, access_key: str, http_client: Optional[HTTPClient] = None, timeout: float = 5.0):
        super().__init__(http_client=http_client, timeout=timeout)
        self.access_key = access_key

    def url_for(self, ip: str) -> str:
        return self.base_url + urllib_parse.quote(ip, safe=":.")

    def params(self) -> Dict[str, object]:
        return {"access_key": self.access_key}

    def parse(self, payload: Mapping[str, object]) -> Optional[Coordinate]:
        # Errors come back as HTTP 200 with {"success": false, "error": {...}}
        if payload.get("success") is False:
            error = payload.get("error")
            if isinstance(error, Mapping):
                logger.warning("ipapi.com rejected the request: %s", error.get("type") or error.get("info"))
            return None
        return self._coordinate(payload.get("latitude"), payload.get("longitude"))


class IpApiProvider(GeoProvider):
    """http://ip-api.com — free, no key, rate limited per client IP."""

    name = "ip-api.com"
    base_url = "http://ip-api.com/json/"

    def url_for(self, ip: str) -> str:
        return self.base_url + urllib_parse.quote(ip, safe=":.")

    def params(self) -> Dict[str, object]:
        return {"fields": "status,message,lat,lon"}

    def parse(self, payload: Mapping[str, object]) -> Optional[Coordinate]:
        if payload.get("status") != "success":
            return None
        return self._coordinate(payload.get("lat"), payload.get("lon"))


ProviderFactory = Callable[[Optional[HTTPClient], float, Optional[str]], Optional[GeoProvider]]


def _ipapi_com(http_client: Optional[HTTPClient], timeout: float, access_key: Optional[str]) -> Optional[GeoProvider]:
    if not access_key:
        logger.warning("ipapi.com is configured but no access key is set; skipping it")
        return None
    return IpApiComProvider(access_key, http_client=http_client, timeout=timeout)


PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {
    "ipwhois": lambda client, timeout, _key: IpWhoIsProvider(http_client=client, timeout=timeout),
    "ipapi_com": _ipapi_com,
    "ip_api": lambda client, timeout, _key: IpApiProvider(http_client=client, timeout=timeout),
}


def build_providers(
    names: Iterable[str],
    *,
    http_client: Optional[HTTPClient] = None,
    timeout: float = 5.0,
    ipapi_access_key: Optional[str] = None,
) -> list[GeoProvider]:
    """Instantiate providers in the configured order."""

    providers: list[GeoProvider] = []
    for name in names:
        factory = PROVIDER_FACTORIES.get(name)
        if factory is None:
            raise ValueError(f"Unknown geolocation provider: {name!r}")
        provider = factory(http_client, timeout, ipapi_access_key)
        if provider is not None:
            providers.append(provider)
    return providers
