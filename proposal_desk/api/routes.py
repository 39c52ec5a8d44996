"""
API routes — thin HTTP layer that delegates to ProposalService.

Routes:
  GET  /health                        → API health check
  GET  /api/proposals                 → List all proposals
  POST /api/proposals                 → Create or update a proposal
  GET  /api/proposals/templates       → Built-in proposal templates
  POST /api/proposals/totals          → Totals for draft price items
  POST /api/proposals/preview         → Markdown → HTML fragment
  GET  /api/proposals/{id}            → One proposal
  GET  /api/proposals/{id}/pdf        → PDF download
  GET  /p/{share_token}               → Public share view
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel

from proposal_desk.config import get_settings
from proposal_desk.models.schemas import (
    PriceLineItem,
    ProposalPayload,
    ProposalRecord,
    ProposalSaveResponse,
    ProposalTemplate,
    ProposalTotals,
    PublicProposalView,
)
from proposal_desk.persistence.proposal_repository import InMemoryProposalRepository
from proposal_desk.services.errors import ProposalNotFoundError
from proposal_desk.services.markdown_service import markdown_to_html
from proposal_desk.services.pricing_service import compute_totals
from proposal_desk.services.proposal_service import ProposalService
from proposal_desk.services.template_service import list_templates

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
proposal_router = APIRouter()
share_router = APIRouter()


@lru_cache()
def get_proposal_service() -> ProposalService:
    """Process-wide service backed by the in-memory repository."""
    return ProposalService(InMemoryProposalRepository(), get_settings())


# ── Request schemas ──────────────────────────────────────
class DraftTotalsRequest(BaseModel):
    price_items: list[PriceLineItem] = []


class PreviewRequest(BaseModel):
    markdown: str = ""


class PreviewResponse(BaseModel):
    html: str


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Proposals ────────────────────────────────────────────

@proposal_router.get("", response_model=list[ProposalRecord])
async def list_proposals(service: ProposalService = Depends(get_proposal_service)):
    return service.list_all()


@proposal_router.post("", response_model=ProposalSaveResponse)
async def save_proposal(
    body: ProposalPayload,
    service: ProposalService = Depends(get_proposal_service),
):
    try:
        return service.save(body)
    except ProposalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@proposal_router.get("/templates", response_model=list[ProposalTemplate])
async def get_templates():
    return list_templates(get_settings().default_tax_rate)


@proposal_router.post("/totals", response_model=ProposalTotals)
async def draft_totals(body: DraftTotalsRequest):
    """Live totals while a proposal is being edited; no validation."""
    return compute_totals(body.price_items)


@proposal_router.post("/preview", response_model=PreviewResponse)
async def preview_markdown(body: PreviewRequest):
    return PreviewResponse(html=markdown_to_html(body.markdown))


@proposal_router.get("/{proposal_id}", response_model=ProposalRecord)
async def get_proposal(
    proposal_id: str,
    service: ProposalService = Depends(get_proposal_service),
):
    try:
        return service.get(proposal_id)
    except ProposalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@proposal_router.get("/{proposal_id}/pdf")
async def export_proposal_pdf(
    proposal_id: str,
    service: ProposalService = Depends(get_proposal_service),
):
    try:
        document = service.export_pdf(proposal_id)
    except ProposalNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{document.filename}"',
            "ETag": f'"{document.sha256}"',
        },
    )


# ── Public share page ────────────────────────────────────

@share_router.get("/p/{share_token}", response_model=PublicProposalView)
async def shared_proposal(
    share_token: str,
    service: ProposalService = Depends(get_proposal_service),
):
    try:
        return service.public_view(share_token)
    except ProposalNotFoundError:
        raise HTTPException(status_code=404, detail="Not found")
