from __future__ import annotations

import math
from typing import Any

from fxconvert.core.errors import InvalidAmountError
from fxconvert.models.conversion import ConversionResult
from fxconvert.services.money import round2
from .resolver import RateResolver

"""Cross-rate conversion between any two codes in the current snapshot.

Responsibilities:
    - Reject bad amounts before anything touches the network.
    - Fetch the snapshot through the injected RateResolver (cache first).
    - Derive the cross rate as to/from, both being quoted against the base.
    - Apply round2 to the converted amount only; the rate is returned as-is.
"""


def validate_amount(amount: Any) -> float:
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidAmountError(f"Amount must be a number, got {amount!r}")
    value = float(amount)
    if not math.isfinite(value):
        raise InvalidAmountError(f"Amount must be finite, got {amount!r}")
    if value < 0:
        raise InvalidAmountError(f"Amount must not be negative, got {amount!r}")
    return value


def parse_amount(raw: str | None) -> float:
    """Parse user-entered text into a validated amount."""
    text = (raw or "").strip()
    if not text:
        raise InvalidAmountError("Amount is required")
    try:
        value = float(text)
    except ValueError as e:
        raise InvalidAmountError(f"Amount is not a number: {raw!r}") from e
    return validate_amount(value)


class ConversionService:
    def __init__(self, resolver: RateResolver):
        self._resolver = resolver

    def convert(self, from_code: str, to_code: str, amount: float) -> ConversionResult:
        value = validate_amount(amount)
        from_code = from_code.strip().upper()
        to_code = to_code.strip().upper()

        snapshot = self._resolver.resolve()
        from_rate = snapshot.rate_for(from_code)
        to_rate = snapshot.rate_for(to_code)
        effective_rate = to_rate / from_rate
        converted = value * effective_rate
        if not math.isfinite(converted):
            raise InvalidAmountError(f"Amount {value!r} is too large to convert")

        return ConversionResult(
            from_currency=from_code,
            to_currency=to_code,
            amount=value,
            converted_amount=round2(converted),
            effective_rate=effective_rate,
        )
