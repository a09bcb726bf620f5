"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.utils import (
    ensure_utc,
    generate_cuid,
    normalize_text,
    parse_iso_date,
    utc_now,
    validate_identifier,
)

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "parse_iso_date",
    "normalize_text",
    "validate_identifier",
]
