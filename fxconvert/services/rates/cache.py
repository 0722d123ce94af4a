from __future__ import annotations

import json
import logging
import time
from typing import Callable, Optional

from pydantic import ValidationError

from fxconvert.models.rates import RateSnapshot
from fxconvert.services.storage import KeyValueStore

"""Single-snapshot rate cache.

Purpose:
    Keep the last fetched RateSnapshot in a KeyValueStore for a fixed TTL
    (24h by default) so repeated conversions do not hit the upstream API.

Storage layout (two keys, both plain strings):
    - exchangeRateCache: JSON object of code -> rate
    - exchangeRateExpiration: integer epoch milliseconds

Reads fail closed: an expired or unparseable entry is removed and reported
as absent. Writes replace the whole entry; there is no merging.
"""

logger = logging.getLogger("fxconvert.rates.cache")

CACHE_KEY = "exchangeRateCache"
EXPIRATION_KEY = "exchangeRateExpiration"
DEFAULT_TTL_SECONDS = 24 * 60 * 60


def _parse_expiration(raw: str) -> Optional[int]:
    try:
        return int(raw.strip())
    except ValueError:
        return None


class RateCache:
    def __init__(
        self,
        store: KeyValueStore,
        base_currency: str = "USD",
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds <= 0:
            raise ValueError("cache ttl must be positive seconds")
        self._store = store
        self._base = base_currency.upper()
        self._ttl_ms = ttl_seconds * 1000
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    # Public API -----------------------------------------------
    def read(self) -> Optional[RateSnapshot]:
        cached = self._store.get(CACHE_KEY)
        raw_expiration = self._store.get(EXPIRATION_KEY)
        if cached is None or raw_expiration is None:
            return None

        expiration = _parse_expiration(raw_expiration)
        if expiration is None:
            logger.warning("discarding cache entry with corrupt expiration %r", raw_expiration)
            self.clear()
            return None
        if self._now_ms() > expiration:
            logger.debug("rate cache expired at %s", expiration)
            self.clear()
            return None

        try:
            snapshot = RateSnapshot(base=self._base, rates=json.loads(cached))
        except (ValueError, ValidationError) as e:
            logger.warning("discarding corrupt cached rates: %s", e)
            self.clear()
            return None
        logger.debug("rate cache hit", extra={"expires_at": expiration})
        return snapshot

    def write(self, snapshot: RateSnapshot) -> int:
        """Store ``snapshot`` and return the new expiration (epoch ms)."""
        expiration = self._now_ms() + self._ttl_ms
        self._store.set(CACHE_KEY, json.dumps(snapshot.rates))
        self._store.set(EXPIRATION_KEY, str(expiration))
        logger.debug("rate cache stored", extra={"expires_at": expiration})
        return expiration

    def clear(self) -> None:
        self._store.remove(CACHE_KEY)
        self._store.remove(EXPIRATION_KEY)

    def expires_at(self) -> Optional[int]:
        raw = self._store.get(EXPIRATION_KEY)
        if raw is None or self._store.get(CACHE_KEY) is None:
            return None
        return _parse_expiration(raw)
