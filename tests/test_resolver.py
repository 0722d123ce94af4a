import pytest

from fxconvert.core.errors import RateFetchError, RateParseError
from fxconvert.services.http_client import InvalidJsonError
from fxconvert.services.rates import RateResolver
from fxconvert.services.rates.resolver import DEFAULT_RATES_URL

from .conftest import FakeFetcher


def test_miss_fetches_and_stores(resolver, fetcher, cache):
    snapshot = resolver.resolve()
    assert snapshot.rates == {"USD": 1.0, "CNY": 7.0, "JPY": 150.0}
    assert snapshot.base == "USD"
    assert fetcher.calls == [{"url": DEFAULT_RATES_URL, "timeout": 5.0}]
    assert cache.read() == snapshot


def test_hit_does_not_fetch(resolver, fetcher):
    first = resolver.resolve()
    second = resolver.resolve()
    assert first == second
    assert len(fetcher.calls) == 1


def test_expired_cache_refetches(resolver, fetcher, clock):
    resolver.resolve()
    clock.advance(25 * 60 * 60)
    resolver.resolve()
    assert len(fetcher.calls) == 2


def test_refresh_always_fetches(resolver, fetcher):
    resolver.resolve()
    resolver.refresh()
    assert len(fetcher.calls) == 2


def test_transport_failure_raises_fetch_error(cache, failing_fetcher):
    resolver = RateResolver(cache, fetch_json=failing_fetcher)
    with pytest.raises(RateFetchError):
        resolver.resolve()
    assert cache.read() is None


def test_invalid_json_raises_parse_error(cache):
    resolver = RateResolver(cache, fetch_json=FakeFetcher(error=InvalidJsonError("bad body")))
    with pytest.raises(RateParseError):
        resolver.resolve()


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"result": "error"},
        {"rates": None},
        {"rates": {}},
        {"rates": {"USD": "1"}},
        {"rates": {"USD": 1, "XXX": 0}},
        {"rates": {"USD": 1, "XXX": -2.5}},
    ],
)
def test_malformed_payload_raises_parse_error_and_caches_nothing(cache, payload):
    resolver = RateResolver(cache, fetch_json=FakeFetcher(payload=payload))
    with pytest.raises(RateParseError):
        resolver.resolve()
    assert cache.read() is None


def test_url_and_timeout_are_passed_through(cache, fetcher):
    resolver = RateResolver(
        cache, url="https://example.test/latest/USD", timeout=1.5, fetch_json=fetcher
    )
    resolver.resolve()
    assert fetcher.calls == [{"url": "https://example.test/latest/USD", "timeout": 1.5}]


def test_codes_colliding_ignoring_case_raise_parse_error(cache):
    resolver = RateResolver(cache, fetch_json=FakeFetcher(payload={"rates": {"usd": 1, "USD": 2}}))
    with pytest.raises(RateParseError):
        resolver.resolve()
    assert cache.read() is None
