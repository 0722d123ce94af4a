from __future__ import annotations

import math
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from fxconvert.core.errors import UnknownCurrencyError


class RateSnapshot(BaseModel):
    """One fetched set of rates, each expressed per 1 unit of ``base``."""

    model_config = ConfigDict(frozen=True, strict=True)

    base: str
    rates: Dict[str, float]

    @field_validator("base")
    def upper_base(cls, v: str) -> str:
        return v.upper()

    @field_validator("rates")
    def valid_rates(cls, v: Dict[str, float]) -> Dict[str, float]:
        if not v:
            raise ValueError("rates must not be empty")
        for code, rate in v.items():
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"rate for {code} must be a positive finite number")
        normalised = {code.upper(): float(rate) for code, rate in v.items()}
        if len(normalised) != len(v):
            raise ValueError("currency codes must be unique ignoring case")
        return normalised

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self.rates

    def get(self, code: str) -> Optional[float]:
        return self.rates.get(code.upper())

    def rate_for(self, code: str) -> float:
        rate = self.get(code)
        if rate is None:
            raise UnknownCurrencyError(code.upper())
        return rate
