from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ConversionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_currency: str
    to_currency: str
    amount: float
    converted_amount: float
    effective_rate: float
