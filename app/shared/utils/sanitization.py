"""Input normalization helpers for free text and identifiers."""

import re

IDENTIFIER_MAX_LENGTH = 64
IDENTIFIER_PATTERN = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(IDENTIFIER_MAX_LENGTH) + r"}$"
)


def normalize_text(value: str | None) -> str | None:
    """Trim value; return None when it is None or blank after trimming."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def validate_identifier(value: object) -> str:
    """Return value (trimmed) if it is a well-formed row identifier.

    Identifiers are CUIDs: alphanumeric, underscore, hyphen; max 64 characters.

    Raises:
        ValueError: If value is not a string or has an invalid format.
    """
    if not isinstance(value, str) or not IDENTIFIER_PATTERN.match(value.strip()):
        raise ValueError("Invalid identifier format")
    return value.strip()
