"""FastAPI application factory.

There is no module-level app: importing this module must not open storage.
Serve it through the factory, e.g. ``uvicorn --factory fxconvert.main:create_app``.
"""

import logging

from fastapi import FastAPI

from .core.config import get_settings, Settings
from .core.errors import register_error_handlers
from .core.logging import init_logging, request_context_middleware
from .routers import convert, health, rates, ui
from .services.http_client import get_json
from .services.rates import ConversionService, RateCache, RateResolver
from .services.storage import KeyValueStore, build_store


def create_app(
    settings_override: Settings | None = None,
    store: KeyValueStore | None = None,
    fetch_json=get_json,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., memory storage). Falls back to cached get_settings().
    store / fetch_json: replace the storage backend or the HTTP call, mostly for tests.
    """
    settings = settings_override or get_settings()
    if settings_override is not None:
        settings.init_post_load()
    init_logging(debug=settings.debug)

    try:
        store = store if store is not None else build_store(settings)
    except Exception:
        logging.getLogger("fxconvert").exception("failed to open rate storage on startup")
        raise

    rate_cache = RateCache(
        store,
        base_currency=settings.base_currency,
        ttl_seconds=settings.rates_cache_ttl_seconds,
    )
    rate_resolver = RateResolver(
        rate_cache,
        url=settings.rates_url,
        base_currency=settings.base_currency,
        timeout=settings.http_timeout_seconds,
        fetch_json=fetch_json,
    )

    app = FastAPI(title=settings.app_name, debug=settings.debug, version=settings.version)
    app.state.settings = settings
    app.state.rate_cache = rate_cache
    app.state.rate_resolver = rate_resolver
    app.state.conversion_service = ConversionService(rate_resolver)

    app.middleware("http")(request_context_middleware)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(convert.router)
    app.include_router(rates.router)
    app.include_router(ui.router)

    return app
