from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from fxconvert.core.config import Settings
from fxconvert.main import create_app
from fxconvert.services.http_client import HttpError
from fxconvert.services.rates import ConversionService, RateCache, RateResolver
from fxconvert.services.storage import InMemoryStore

T0 = 1_700_000_000.0  # epoch seconds
RATES = {"USD": 1, "CNY": 7, "JPY": 150}


class FakeClock:
    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Stands in for http_client.get_json and records every call."""

    def __init__(self, payload: Any = None, error: Optional[Exception] = None):
        self.payload = {"base": "USD", "rates": dict(RATES)} if payload is None else payload
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, url: str, *, timeout: float = 5.0) -> Any:
        self.calls.append({"url": url, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def cache(store, clock) -> RateCache:
    return RateCache(store, base_currency="USD", clock=clock)


@pytest.fixture
def resolver(cache, fetcher) -> RateResolver:
    return RateResolver(cache, fetch_json=fetcher)


@pytest.fixture
def service(resolver) -> ConversionService:
    return ConversionService(resolver)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_backend="memory", debug=False)


@pytest.fixture
def client(settings, store, fetcher):
    app = create_app(settings_override=settings, store=store, fetch_json=fetcher)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(error=HttpError("connection refused"))
