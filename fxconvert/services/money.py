"""Money / rounding helpers.

Amounts go through ``Decimal(str(value))`` so the cent boundary is judged on
the shortest decimal repr of the float (14.285 rounds to 14.29, not 14.28).
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP, localcontext

CENT = Decimal("0.01")


def round2(value: float) -> float:
    """Round to cents, halves away from zero."""
    d = Decimal(str(value))
    if not d.is_finite():
        raise ValueError(f"cannot round non-finite value {value!r}")
    with localcontext() as ctx:
        # quantize needs every integer digit plus two decimals
        ctx.prec = max(ctx.prec, d.adjusted() + 3)
        return float(d.quantize(CENT, rounding=ROUND_HALF_UP))
