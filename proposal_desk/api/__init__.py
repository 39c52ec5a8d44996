"""
FastAPI application factory and API package.

Run with:
    uvicorn proposal_desk.api:app --reload --port 8000

Or via main.py:
    python -m proposal_desk --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proposal_desk.config import get_settings
from proposal_desk.api.routes import health_router, proposal_router, share_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="Proposal Desk API",
        description="Proposal pricing, public sharing and PDF export",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
    )

    # CORS: the frontend is served from another origin in dev
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(proposal_router, prefix="/api/proposals", tags=["Proposals"])
    application.include_router(share_router, tags=["Public"])

    logger.info(f"Created {settings.app_name} API")
    return application


# Module-level instance for `uvicorn proposal_desk.api:app`
app = create_app()
