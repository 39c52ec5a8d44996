"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "Proposal Desk"
    debug: bool = True
    public_base_url: str = "http://localhost:8000"

    # ── Pricing ──────────────────────────────────────────
    currency: str = "CZK"
    default_tax_rate: float = 0.21
    deal_desk_margin_threshold: float = 0.15  # compared against tax / total

    # ── Export ───────────────────────────────────────────
    pdf_filename_prefix: str = "proposal"

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
