"""
Proposal Desk — Main Entry Point

Export a proposal built from a template (CLI):
    python -m proposal_desk web-redesign proposal.pdf

Run as an API server (for the frontend):
    python -m proposal_desk --serve
    # or: uvicorn proposal_desk.api:app --reload --port 8000

Or import and run programmatically:
    from proposal_desk.main import run
    record = run("support-retainer", "retainer.pdf")
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from proposal_desk.config import get_settings
from proposal_desk.models.schemas import ProposalRecord
from proposal_desk.persistence.proposal_repository import InMemoryProposalRepository
from proposal_desk.services.proposal_service import ProposalService
from proposal_desk.services.template_service import payload_from_template
from proposal_desk.utils.formatting import format_currency, format_percent
from proposal_desk.utils.logger import setup_logging

DEFAULT_TEMPLATE = "web-redesign"


def run(template_id: str = DEFAULT_TEMPLATE, output_path: str = "") -> ProposalRecord:
    """Create a proposal from a template, export it as PDF and return the record."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    service = ProposalService(InMemoryProposalRepository(), settings)
    response = service.save(payload_from_template(template_id, settings.default_tax_rate))
    record = response.proposal

    document = service.export_pdf(record.id)
    target = Path(output_path or document.filename)
    target.write_bytes(document.content)

    _print_summary(record, service.share_url(record), str(target), response.warnings)
    return record


def _print_summary(record: ProposalRecord, share_url: str, pdf_path: str, warnings: list[str]) -> None:
    """Log a human-readable summary of the exported proposal."""
    logger = logging.getLogger(__name__)
    currency = get_settings().currency

    logger.info("-" * 60)
    logger.info(f"  Proposal:       {record.id}")
    logger.info(f"  Title:          {record.title}")
    logger.info(f"  Items:          {len(record.price_items)}")
    logger.info(f"  Subtotal:       {format_currency(record.subtotal_minor, currency)}")
    logger.info(f"  Tax:            {format_currency(record.tax_minor, currency)}")
    logger.info(f"  Total:          {format_currency(record.total_minor, currency)}")
    logger.info(f"  Margin ratio:   {format_percent(record.margin_ratio)}")
    logger.info(f"  Share URL:      {share_url}")
    logger.info(f"  PDF:            {pdf_path}")
    for warning in warnings:
        logger.info(f"  ! {warning}")
    logger.info("-" * 60)


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server (for frontend communication)."""
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("proposal_desk.api:app", host=host, port=port, reload=settings.debug)


def cli(argv: list[str]) -> None:
    if "--serve" in argv:
        serve()
        return
    template_id = argv[0] if len(argv) > 0 else DEFAULT_TEMPLATE
    output_path = argv[1] if len(argv) > 1 else ""
    run(template_id, output_path)


def main() -> None:
    cli(sys.argv[1:])


if __name__ == "__main__":
    main()
