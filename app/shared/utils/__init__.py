"""Shared utilities: datetime, generators, sanitization."""

from app.shared.utils.datetime import ensure_utc, parse_iso_date, utc_now
from app.shared.utils.generators import generate_cuid
from app.shared.utils.sanitization import normalize_text, validate_identifier

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "parse_iso_date",
    "normalize_text",
    "validate_identifier",
]
