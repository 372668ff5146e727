import json

import pytest

from fakes import DummyHttpClient, FakeRedis, StubProvider, network_error
from puja_locator.config import INDIA_CENTROID
from puja_locator.core import Coordinate
from puja_locator.services import (
    GeoProviderChain,
    IpApiComProvider,
    IpApiProvider,
    IpWhoIsProvider,
    ResponseCache,
    build_providers,
)

PUBLIC_IP = "49.36.10.20"
BENGALURU = Coordinate(12.97, 77.59)
CHENNAI = Coordinate(13.08, 80.27)


def test_ipwhois_parses_successful_payload():
    client = DummyHttpClient()
    client.queue(f"http://ipwho.is/{PUBLIC_IP}", {"success": True, "latitude": 12.97, "longitude": 77.59})

    provider = IpWhoIsProvider(http_client=client, timeout=2.5)

    assert provider.locate(PUBLIC_IP) == BENGALURU
    assert client.calls == [(f"http://ipwho.is/{PUBLIC_IP}", {}, 2.5)]


def test_ipwhois_unsuccessful_payload_is_absent():
    client = DummyHttpClient()
    client.queue(f"http://ipwho.is/{PUBLIC_IP}", {"success": False, "message": "Reserved range"})

    assert IpWhoIsProvider(http_client=client).locate(PUBLIC_IP) is None


def test_ipapi_com_sends_access_key_and_parses_strings():
    client = DummyHttpClient()
    client.queue(f"https://api.ipapi.com/api/{PUBLIC_IP}", {"latitude": "13.08", "longitude": "80.27"})

    provider = IpApiComProvider("secret", http_client=client)

    assert provider.locate(PUBLIC_IP) == CHENNAI
    assert client.calls[0][1] == {"access_key": "secret"}


def test_ipapi_com_error_payload_is_absent():
    client = DummyHttpClient()
    client.queue(
        f"https://api.ipapi.com/api/{PUBLIC_IP}",
        {"success": False, "error": {"code": 101, "type": "invalid_access_key"}},
    )

    assert IpApiComProvider("bad", http_client=client).locate(PUBLIC_IP) is None


def test_ip_api_requires_success_status():
    client = DummyHttpClient()
    client.queue(f"http://ip-api.com/json/{PUBLIC_IP}", {"status": "fail", "message": "private range"})
    assert IpApiProvider(http_client=client).locate(PUBLIC_IP) is None

    client.queue(f"http://ip-api.com/json/{PUBLIC_IP}", {"status": "success", "lat": 12.97, "lon": 77.59})
    assert IpApiProvider(http_client=client).locate(PUBLIC_IP) == BENGALURU


@pytest.mark.parametrize(
    "response",
    [
        network_error(),
        TimeoutError("timed out"),
        ValueError("Expecting value: line 1 column 1"),
        ["not", "a", "mapping"],
        {"success": True, "latitude": None, "longitude": 77.59},
        {"success": True, "latitude": 123.0, "longitude": 77.59},
    ],
)
def test_provider_failures_collapse_to_none(response):
    client = DummyHttpClient()
    client.queue(f"http://ipwho.is/{PUBLIC_IP}", response)

    assert IpWhoIsProvider(http_client=client).locate(PUBLIC_IP) is None


def test_build_providers_keeps_order_and_skips_keyless_ipapi_com():
    providers = build_providers(["ip_api", "ipapi_com", "ipwhois"], timeout=1.0)

    assert [provider.name for provider in providers] == ["ip-api.com", "ipwho.is"]
    assert all(provider.timeout == 1.0 for provider in providers)


def test_build_providers_includes_ipapi_com_with_key():
    providers = build_providers(["ipapi_com"], ipapi_access_key="key")

    assert isinstance(providers[0], IpApiComProvider)


def test_build_providers_rejects_unknown_names():
    with pytest.raises(ValueError):
        build_providers(["ipwhois", "geo-magic"])


def test_chain_returns_first_successful_provider():
    failing = StubProvider("first", None)
    succeeding = StubProvider("second", BENGALURU)
    unused = StubProvider("third", CHENNAI)

    chain = GeoProviderChain([failing, succeeding, unused], fallback=INDIA_CENTROID)

    assert chain.resolve(PUBLIC_IP) == BENGALURU
    assert failing.calls == [PUBLIC_IP]
    assert succeeding.calls == [PUBLIC_IP]
    assert unused.calls == []


def test_chain_falls_back_when_all_providers_fail():
    providers = [StubProvider("a", None), StubProvider("b", None)]
    chain = GeoProviderChain(providers, fallback=INDIA_CENTROID)

    assert chain.resolve_with_source(PUBLIC_IP) == (INDIA_CENTROID, "fallback")
    assert [len(provider.calls) for provider in providers] == [1, 1]


def test_chain_falls_back_without_providers():
    assert GeoProviderChain([], fallback=INDIA_CENTROID).resolve(PUBLIC_IP) == INDIA_CENTROID


@pytest.mark.parametrize("ip", ["127.0.0.1", "::1", "10.0.0.5", "192.168.1.20", "169.254.1.1", "", None, "not-an-ip"])
def test_non_routable_addresses_skip_providers(ip):
    provider = StubProvider("only", BENGALURU)
    chain = GeoProviderChain([provider], fallback=INDIA_CENTROID)

    assert chain.resolve(ip) == INDIA_CENTROID
    assert provider.calls == []


def test_chain_with_real_adapters_survives_network_errors():
    client = DummyHttpClient()
    client.queue(f"http://ipwho.is/{PUBLIC_IP}", network_error())
    client.queue(f"http://ip-api.com/json/{PUBLIC_IP}", TimeoutError("timed out"))
    providers = build_providers(["ipwhois", "ip_api"], http_client=client)

    chain = GeoProviderChain(providers, fallback=INDIA_CENTROID)

    assert chain.resolve(PUBLIC_IP) == INDIA_CENTROID
    assert len(client.calls) == 2


def test_chain_caches_successful_lookups_only():
    redis = FakeRedis()
    cache = ResponseCache(redis, prefix="test")
    provider = StubProvider("only", BENGALURU)
    chain = GeoProviderChain([provider], fallback=INDIA_CENTROID, cache=cache, cache_ttl=60)

    assert chain.resolve(PUBLIC_IP) == BENGALURU
    assert chain.resolve_with_source(PUBLIC_IP) == (BENGALURU, "ip")
    assert provider.calls == [PUBLIC_IP]
    assert json.loads(redis.store[f"test:geo:{PUBLIC_IP}"]) == {"latitude": 12.97, "longitude": 77.59}
    assert redis.ttls[f"test:geo:{PUBLIC_IP}"] == 60

    provider.result = None
    assert chain.resolve("8.8.8.8") == INDIA_CENTROID
    assert "test:geo:8.8.8.8" not in redis.store


def test_chain_ignores_corrupt_cache_entries():
    redis = FakeRedis()
    redis.store[f"test:geo:{PUBLIC_IP}"] = b"{not json"
    provider = StubProvider("only", CHENNAI)
    chain = GeoProviderChain([provider], fallback=INDIA_CENTROID, cache=ResponseCache(redis, prefix="test"))

    assert chain.resolve(PUBLIC_IP) == CHENNAI
