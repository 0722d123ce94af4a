from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from fxconvert.models.conversion import ConversionResult
from fxconvert.services.rates import ConversionService
from .deps import get_conversion_service

router = APIRouter(prefix="/convert", tags=["convert"])


@router.get("", response_model=ConversionResult, summary="Convert an amount between two currencies")
def convert(
    from_currency: str = Query(..., min_length=3, max_length=3, description="Source currency code, e.g. CNY"),
    to_currency: str = Query(..., min_length=3, max_length=3, description="Target currency code, e.g. USD"),
    amount: float = Query(..., description="Non-negative amount in the source currency"),
    service: ConversionService = Depends(get_conversion_service),
) -> ConversionResult:
    return service.convert(from_currency, to_currency, amount)
