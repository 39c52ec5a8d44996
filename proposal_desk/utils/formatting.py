"""
Display formatting for amounts and ratios.

Uses the same half-away-from-zero rounding as the pricing engine, so a
displayed percentage always matches the one in a deal-desk warning.
"""

from __future__ import annotations

from .rounding import finite_or_zero, round_half_away_from_zero


def format_currency(value: float | int | None, currency: str = "CZK") -> str:
    """
    Format a whole-unit amount with space thousands separators:
    65000 -> '65 000 CZK'. Non-numeric input renders as '0 CZK'.
    """
    num = finite_or_zero(value)
    amount = f"{round_half_away_from_zero(num):,}".replace(",", " ")
    return f"{amount} {currency}".strip()


def format_percent(ratio: float) -> str:
    """0.1736 -> '17 %'"""
    num = finite_or_zero(ratio)
    return f"{round_half_away_from_zero(num * 100)} %"
