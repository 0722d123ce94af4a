from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from fxconvert.services.rates import RateCache, RateResolver
from .deps import get_rate_cache, get_rate_resolver

"""Rates router exposing the cached snapshot and cache controls.

Endpoints:
    - GET /rates           -> current snapshot (fetches on cache miss)
    - POST /rates/refresh  -> drop the cache and fetch again
    - GET /rates/cache     -> whether a snapshot is cached and until when
    - DELETE /rates/cache  -> drop the cached snapshot
"""

router = APIRouter(prefix="/rates", tags=["rates"])


class SnapshotOut(BaseModel):
    base: str
    rates: Dict[str, float]


class CacheStatusOut(BaseModel):
    cached: bool
    expires_at: Optional[int] = None


@router.get("", response_model=SnapshotOut, summary="Current exchange rate snapshot")
def get_rates(resolver: RateResolver = Depends(get_rate_resolver)):
    snapshot = resolver.resolve()
    return SnapshotOut(base=snapshot.base, rates=snapshot.rates)


@router.post("/refresh", response_model=SnapshotOut, summary="Force a fresh fetch")
def refresh_rates(resolver: RateResolver = Depends(get_rate_resolver)):
    snapshot = resolver.refresh()
    return SnapshotOut(base=snapshot.base, rates=snapshot.rates)


@router.get("/cache", response_model=CacheStatusOut, summary="Rate cache status")
def cache_status(cache: RateCache = Depends(get_rate_cache)):
    snapshot = cache.read()
    if snapshot is None:
        return CacheStatusOut(cached=False)
    return CacheStatusOut(cached=True, expires_at=cache.expires_at())


@router.delete("/cache", summary="Clear the cached snapshot")
def clear_cache(cache: RateCache = Depends(get_rate_cache)):
    cache.clear()
    return {"status": "cleared"}
