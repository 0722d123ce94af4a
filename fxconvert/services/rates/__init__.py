"""Exchange rate cache, resolution and cross-rate conversion."""

from .cache import RateCache
from .conversion import ConversionService, parse_amount
from .resolver import RateResolver

__all__ = ["RateCache", "ConversionService", "RateResolver", "parse_amount"]
