"""
Numeric helpers shared by pricing and display formatting.
"""

from __future__ import annotations

import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any

# Enough digits for any finite float, so quantize never overflows
_ROUNDING_CONTEXT = Context(prec=400)


def round_half_away_from_zero(value: float | int) -> int:
    """Currency rounding: 2.5 -> 3, -2.5 -> -3. Non-finite values give 0."""
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    # Decimal(float) is exact, so x.5 ties are detected on the real value
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT))


def finite_or_zero(value: Any) -> float:
    """float(value), or 0.0 when it is missing, non-numeric or non-finite."""
    if isinstance(value, bool):
        return float(value)
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return num if math.isfinite(num) else 0.0
