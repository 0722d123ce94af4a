from __future__ import annotations

import logging
from typing import Any, Callable

from pydantic import ValidationError

from fxconvert.core.errors import RateFetchError, RateParseError
from fxconvert.models.rates import RateSnapshot
from fxconvert.services.http_client import HttpError, InvalidJsonError, get_json
from .cache import RateCache

logger = logging.getLogger("fxconvert.rates.resolver")

DEFAULT_RATES_URL = "https://api.exchangerate-api.com/v4/latest/USD"

FetchJson = Callable[..., Any]


class RateResolver:
    """Supply a RateSnapshot, preferring the cache over the network.

    One GET per cache miss, no retries. Two callers missing at the same time
    both fetch; whichever writes last wins, which is harmless since both
    snapshots describe the same upstream state.
    """

    def __init__(
        self,
        cache: RateCache,
        url: str = DEFAULT_RATES_URL,
        base_currency: str = "USD",
        timeout: float = 5.0,
        fetch_json: FetchJson = get_json,
    ):
        self._cache = cache
        self._url = url
        self._base = base_currency.upper()
        self._timeout = timeout
        self._fetch_json = fetch_json

    def resolve(self) -> RateSnapshot:
        snapshot = self._cache.read()
        if snapshot is not None:
            return snapshot
        snapshot = self._fetch()
        self._cache.write(snapshot)
        return snapshot

    def refresh(self) -> RateSnapshot:
        self._cache.clear()
        return self.resolve()

    # Internal --------------------------------------------------
    def _fetch(self) -> RateSnapshot:
        logger.info("fetching exchange rates", extra={"url": self._url})
        try:
            data = self._fetch_json(self._url, timeout=self._timeout)
        except InvalidJsonError as e:
            raise RateParseError(str(e)) from e
        except HttpError as e:
            raise RateFetchError(str(e)) from e

        if not isinstance(data, dict) or "rates" not in data:
            raise RateParseError(f"Response from {self._url} has no 'rates' field")
        try:
            snapshot = RateSnapshot(base=self._base, rates=data["rates"])
        except ValidationError as e:
            raise RateParseError(
                f"Malformed 'rates' in response from {self._url}: {e.error_count()} error(s)"
            ) from e
        logger.info("fetched %d exchange rates", len(snapshot.rates))
        return snapshot
