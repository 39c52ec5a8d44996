"""
Pricing Service — line items to subtotal / tax / total / margin ratio.

Rounding happens per line (base, then tax on the rounded base) before
summing, so a proposal total can differ by a unit from rounding the
unrounded sum. Stored totals depend on this order; keep it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Union

from proposal_desk.models.schemas import PriceLineItem, ProposalTotals
from proposal_desk.utils.rounding import finite_or_zero, round_half_away_from_zero

logger = logging.getLogger(__name__)

LineItemLike = Union[PriceLineItem, Mapping[str, Any]]


def _field(item: LineItemLike, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def line_amounts(item: LineItemLike) -> tuple[int, int]:
    """Return (base, tax) for one line, each already rounded."""
    quantity = finite_or_zero(_field(item, "quantity"))
    unit_price = finite_or_zero(_field(item, "unit_price_minor"))
    rate = finite_or_zero(_field(item, "tax_rate"))

    base = round_half_away_from_zero(quantity * unit_price)
    tax = round_half_away_from_zero(base * rate)
    return base, tax


def compute_totals(items: Iterable[LineItemLike]) -> ProposalTotals:
    """
    Sum rounded per-line base and tax amounts.
    Never raises: malformed numbers degrade to zero.
    """
    subtotal = 0
    tax = 0
    count = 0

    for item in items:
        line_base, line_tax = line_amounts(item)
        subtotal += line_base
        tax += line_tax
        count += 1

    total = subtotal + tax
    margin = 0.0 if total == 0 else tax / total

    logger.debug(f"Totals for {count} items: subtotal={subtotal} tax={tax} total={total}")

    return ProposalTotals(
        subtotal_minor=subtotal,
        tax_minor=tax,
        total_minor=total,
        margin_ratio=margin,
    )


def margin_warnings(totals: ProposalTotals, threshold: float) -> list[str]:
    """
    Deal-desk check. Compares margin_ratio (tax / total) with the
    configured threshold and returns human-readable warnings.
    """
    warnings: list[str] = []
    if totals.margin_ratio < threshold:
        warnings.append(
            f"Warning: margin {round_half_away_from_zero(totals.margin_ratio * 100)}% "
            f"is below the {round_half_away_from_zero(threshold * 100)}% limit."
        )
    return warnings
