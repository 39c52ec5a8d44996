from .logger import setup_logging
from .hashing import sha256_hash
from .rounding import round_half_away_from_zero, finite_or_zero
from .formatting import format_currency, format_percent

__all__ = [
    "setup_logging",
    "sha256_hash",
    "round_half_away_from_zero",
    "finite_or_zero",
    "format_currency",
    "format_percent",
]
