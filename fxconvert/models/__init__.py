"""Pydantic domain models for the currency converter."""

from .constants import CURRENCY_SYMBOLS, CurrencyInfo, currency_info  # re-export
from .conversion import ConversionResult
from .rates import RateSnapshot

__all__ = [
    "CURRENCY_SYMBOLS",
    "CurrencyInfo",
    "currency_info",
    "ConversionResult",
    "RateSnapshot",
]
