"""
Data schemas for proposals, their price items and derived totals.

Two flavours of price item exist on purpose:
  - PriceLineItem is lax and feeds the pricing engine, which tolerates
    anything numeric (non-finite values count as zero).
  - PriceItemInput is the validated shape accepted from callers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from proposal_desk.utils.rounding import finite_or_zero
from .enums import ProposalStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Pricing ──────────────────────────────────────────────


class PriceLineItem(BaseModel):
    """One row of a price quote as seen by the pricing engine."""
    model_config = ConfigDict(frozen=True)

    label: str = ""
    quantity: float = 0.0
    unit_price_minor: float = 0.0  # whole currency units, no sub-units
    tax_rate: float = 0.0          # 0-1

    @field_validator("quantity", "unit_price_minor", "tax_rate", mode="before")
    @classmethod
    def _coerce_number(cls, value):
        # Drafts may carry blanks or half-typed numbers; they price as zero
        return finite_or_zero(value)

    @field_validator("label", mode="before")
    @classmethod
    def _coerce_label(cls, value):
        return "" if value is None else str(value)


class ProposalTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal_minor: int = 0
    tax_minor: int = 0
    total_minor: int = 0
    margin_ratio: float = 0.0  # tax / total, not a profit margin


# ── Proposal input ───────────────────────────────────────


class PriceItemInput(BaseModel):
    id: Optional[str] = None
    label: str = Field(min_length=1)
    quantity: int = Field(ge=1)
    unit_price_minor: int = Field(ge=0)
    tax_rate: float = Field(ge=0, le=1)

    def to_line_item(self) -> PriceLineItem:
        return PriceLineItem(
            label=self.label,
            quantity=self.quantity,
            unit_price_minor=self.unit_price_minor,
            tax_rate=self.tax_rate,
        )


class PriceItemRecord(PriceItemInput):
    id: str


class ProposalPayload(BaseModel):
    """Create/update request for a proposal."""
    id: Optional[str] = None
    deal_id: Optional[str] = None
    title: str = Field(min_length=1)
    scope_md: str = Field(min_length=1)
    timeline_md: str = Field(min_length=1)
    status: ProposalStatus = ProposalStatus.DRAFT
    price_items: list[PriceItemInput] = Field(min_length=1)


# ── Stored / serialized proposal ─────────────────────────


class StoredProposal(BaseModel):
    """What the repository keeps. Totals are never stored."""
    id: str
    deal_id: Optional[str] = None
    title: str
    scope_md: str
    timeline_md: str
    status: ProposalStatus = ProposalStatus.DRAFT
    share_token: str
    price_items: list[PriceItemRecord] = []
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ProposalRecord(BaseModel):
    """A proposal with totals recomputed from its price items."""
    id: str
    deal_id: Optional[str] = None
    title: str
    scope_md: str
    timeline_md: str
    status: ProposalStatus
    subtotal_minor: int = 0
    tax_minor: int = 0
    total_minor: int = 0
    margin_ratio: float = 0.0
    share_token: str
    price_items: list[PriceItemRecord] = []
    created_at: datetime
    updated_at: datetime


class ProposalSaveResponse(BaseModel):
    proposal: ProposalRecord
    warnings: list[str] = []


class ProposalTemplate(BaseModel):
    id: str
    title: str
    description: str = ""
    scope_md: str
    timeline_md: str
    price_items: list[PriceItemInput] = []


# ── Public share page ────────────────────────────────────


class PublicPriceRow(BaseModel):
    label: str
    quantity: int
    unit_price_minor: int
    tax_rate: float
    line_total_minor: int  # base + rounded tax
    unit_price_display: str = ""
    tax_rate_display: str = ""
    line_total_display: str = ""


class PublicProposalView(BaseModel):
    title: str
    status: ProposalStatus
    totals: ProposalTotals
    subtotal_display: str = ""
    tax_display: str = ""
    total_display: str = ""
    margin_display: str = ""
    rows: list[PublicPriceRow] = []
    scope_html: str = ""
    timeline_html: str = ""


class ExportedDocument(BaseModel):
    filename: str
    content: bytes
    sha256: str
    media_type: str = "application/pdf"
