"""
Proposal Service — create/update proposals, serialize them with fresh
totals, render the public share view and export PDFs.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from proposal_desk.config import Settings, get_settings
from proposal_desk.models.schemas import (
    ExportedDocument,
    PriceItemRecord,
    ProposalPayload,
    ProposalRecord,
    ProposalSaveResponse,
    PublicPriceRow,
    PublicProposalView,
    StoredProposal,
)
from proposal_desk.persistence.proposal_repository import ProposalRepository
from proposal_desk.services.errors import ProposalNotFoundError
from proposal_desk.services.markdown_service import markdown_to_html, strip_markdown
from proposal_desk.services.pdf_service import create_document
from proposal_desk.services.pricing_service import compute_totals, line_amounts, margin_warnings
from proposal_desk.utils.formatting import format_currency, format_percent
from proposal_desk.utils.hashing import sha256_hash

logger = logging.getLogger(__name__)


def _new_proposal_id() -> str:
    return f"PRP-{uuid.uuid4().hex[:8].upper()}"


def _new_item_id() -> str:
    return uuid.uuid4().hex


class ProposalService:
    """Proposal CRUD and document generation on top of a repository."""

    def __init__(self, repository: ProposalRepository, settings: Settings | None = None):
        self.repository = repository
        self.settings = settings or get_settings()

    # ── Create / update ──────────────────────────────────

    def save(self, payload: ProposalPayload | dict[str, Any]) -> ProposalSaveResponse:
        """
        Validate and upsert a proposal. Price items are replaced wholesale
        on update; id, share token and created_at are kept.
        Raises pydantic.ValidationError for invalid payloads and
        ProposalNotFoundError when updating an unknown id.
        Concurrent saves of one proposal are last-writer-wins.
        """
        parsed = ProposalPayload.model_validate(payload)
        totals = compute_totals(item.to_line_item() for item in parsed.price_items)
        warnings = margin_warnings(totals, self.settings.deal_desk_margin_threshold)

        now = datetime.now(timezone.utc)
        items = [
            PriceItemRecord(
                id=_new_item_id(),
                label=item.label,
                quantity=item.quantity,
                unit_price_minor=item.unit_price_minor,
                tax_rate=item.tax_rate,
            )
            for item in parsed.price_items
        ]

        if parsed.id:
            try:
                stored = self.repository.update(parsed.id, {
                    "deal_id": parsed.deal_id,
                    "title": parsed.title,
                    "scope_md": parsed.scope_md,
                    "timeline_md": parsed.timeline_md,
                    "status": parsed.status,
                    "price_items": items,
                    "updated_at": now,
                })
            except KeyError:
                raise ProposalNotFoundError(f"Proposal {parsed.id} not found") from None
        else:
            stored = self.repository.add(
                StoredProposal(
                    id=_new_proposal_id(),
                    deal_id=parsed.deal_id,
                    title=parsed.title,
                    scope_md=parsed.scope_md,
                    timeline_md=parsed.timeline_md,
                    status=parsed.status,
                    share_token=str(uuid.uuid4()),
                    price_items=items,
                    created_at=now,
                    updated_at=now,
                )
            )

        for warning in warnings:
            logger.warning(f"[{stored.id}] {warning}")
        logger.info(
            f"Saved proposal {stored.id} ({parsed.status.value}): "
            f"total {totals.total_minor} {self.settings.currency}"
        )

        return ProposalSaveResponse(proposal=self.serialize(stored), warnings=warnings)

    # ── Reads ────────────────────────────────────────────

    def serialize(self, stored: StoredProposal) -> ProposalRecord:
        totals = compute_totals(item.to_line_item() for item in stored.price_items)
        return ProposalRecord(
            id=stored.id,
            deal_id=stored.deal_id,
            title=stored.title,
            scope_md=stored.scope_md,
            timeline_md=stored.timeline_md,
            status=stored.status,
            subtotal_minor=totals.subtotal_minor,
            tax_minor=totals.tax_minor,
            total_minor=totals.total_minor,
            margin_ratio=totals.margin_ratio,
            share_token=stored.share_token,
            price_items=stored.price_items,
            created_at=stored.created_at,
            updated_at=stored.updated_at,
        )

    def get(self, proposal_id: str) -> ProposalRecord:
        stored = self.repository.get(proposal_id)
        if stored is None:
            raise ProposalNotFoundError(f"Proposal {proposal_id} not found")
        return self.serialize(stored)

    def get_by_share_token(self, share_token: str) -> ProposalRecord:
        stored = self.repository.get_by_share_token(share_token)
        if stored is None:
            raise ProposalNotFoundError("Shared proposal not found")
        return self.serialize(stored)

    def list_all(self) -> list[ProposalRecord]:
        return [self.serialize(stored) for stored in self.repository.list_all()]

    def share_url(self, record: ProposalRecord) -> str:
        return f"{self.settings.public_base_url.rstrip('/')}/p/{record.share_token}"

    # ── Public share page ────────────────────────────────

    def public_view(self, share_token: str) -> PublicProposalView:
        record = self.get_by_share_token(share_token)
        currency = self.settings.currency

        rows = []
        for item in record.price_items:
            base, tax = line_amounts(item)
            rows.append(
                PublicPriceRow(
                    label=item.label,
                    quantity=item.quantity,
                    unit_price_minor=item.unit_price_minor,
                    tax_rate=item.tax_rate,
                    line_total_minor=base + tax,
                    unit_price_display=format_currency(item.unit_price_minor, currency),
                    tax_rate_display=format_percent(item.tax_rate),
                    line_total_display=format_currency(base + tax, currency),
                )
            )

        totals = compute_totals(item.to_line_item() for item in record.price_items)
        return PublicProposalView(
            title=record.title,
            status=record.status,
            totals=totals,
            subtotal_display=format_currency(totals.subtotal_minor, currency),
            tax_display=format_currency(totals.tax_minor, currency),
            total_display=format_currency(totals.total_minor, currency),
            margin_display=format_percent(totals.margin_ratio),
            rows=rows,
            scope_html=markdown_to_html(record.scope_md),
            timeline_html=markdown_to_html(record.timeline_md),
        )

    # ── PDF export ───────────────────────────────────────

    def export_lines(self, record: ProposalRecord) -> list[str]:
        """Plain-text body of the exported PDF."""
        currency = self.settings.currency
        item_lines = []
        for item in record.price_items:
            base, _ = line_amounts(item)
            item_lines.append(
                f"{item.quantity}x {item.label} - {format_currency(base, currency)} excl. tax"
            )

        return [
            f"Status: {record.status.value}",
            f"Total incl. tax: {format_currency(record.total_minor, currency)}",
            f"Subtotal: {format_currency(record.subtotal_minor, currency)}",
            f"Tax: {format_currency(record.tax_minor, currency)}",
            "",
            "Items:",
            *item_lines,
            "",
            "Scope:",
            *strip_markdown(record.scope_md),
            "",
            "Timeline:",
            *strip_markdown(record.timeline_md),
        ]

    def export_pdf(self, proposal_id: str) -> ExportedDocument:
        record = self.get(proposal_id)
        content = create_document(record.title, self.export_lines(record))
        filename = f"{self.settings.pdf_filename_prefix}-{record.id}.pdf"
        logger.info(f"Exported {filename} ({len(content)} bytes)")
        return ExportedDocument(filename=filename, content=content, sha256=sha256_hash(content))
