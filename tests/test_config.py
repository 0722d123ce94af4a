import json
import logging

import pytest

from fxconvert.core.config import Settings
from fxconvert.core.logging import JsonFormatter, RequestIdFilter, request_id_ctx


def test_defaults_point_at_usd_endpoint():
    settings = Settings(storage_backend="memory")
    settings.init_post_load()
    assert settings.rates_url == "https://api.exchangerate-api.com/v4/latest/USD"
    assert settings.rates_cache_ttl_seconds == 86400
    assert settings.db_path is None


def test_base_currency_is_normalised():
    settings = Settings(storage_backend="memory", base_currency="eur")
    settings.init_post_load()
    assert settings.rates_url.endswith("/EUR")


def test_unknown_backend_rejected():
    with pytest.raises(ValueError):
        Settings(storage_backend="redis").init_post_load()


def test_non_positive_ttl_rejected():
    with pytest.raises(ValueError):
        Settings(storage_backend="memory", rates_cache_ttl_seconds=0).init_post_load()


def test_json_formatter_includes_request_id_and_extra():
    record = logging.LogRecord("fxconvert.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    record.error_code = "unknown_currency"
    token = request_id_ctx.set("abc123")
    try:
        RequestIdFilter().filter(record)
    finally:
        request_id_ctx.reset(token)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello x"
    assert payload["request_id"] == "abc123"
    assert payload["error_code"] == "unknown_currency"
    assert payload["logger"] == "fxconvert.test"
