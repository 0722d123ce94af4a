"""FastAPI dependencies resolving the service objects built by create_app."""

from fastapi import Request

from fxconvert.core.config import Settings
from fxconvert.services.rates import ConversionService, RateCache, RateResolver


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_rate_cache(request: Request) -> RateCache:
    return request.app.state.rate_cache


def get_rate_resolver(request: Request) -> RateResolver:
    return request.app.state.rate_resolver


def get_conversion_service(request: Request) -> ConversionService:
    return request.app.state.conversion_service
