"""Services — pricing, Markdown, PDF, templates and the ProposalService."""

from proposal_desk.services.errors import ProposalError, ProposalNotFoundError
from proposal_desk.services.markdown_service import markdown_to_html, strip_markdown
from proposal_desk.services.pdf_service import PdfWriter, create_document
from proposal_desk.services.pricing_service import compute_totals, line_amounts, margin_warnings
from proposal_desk.services.proposal_service import ProposalService

__all__ = [
    "ProposalError",
    "ProposalNotFoundError",
    "ProposalService",
    "PdfWriter",
    "compute_totals",
    "create_document",
    "line_amounts",
    "margin_warnings",
    "markdown_to_html",
    "strip_markdown",
]
