"""Bearer token verification (and a token helper for scripts and tests).

Tokens are issued by an external credential service; this module only checks
the signature and expiry and extracts the identity claims sub, role and unit.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings

REQUIRED_CLAIMS = ("sub", "role", "unit")


def create_access_token(
    user_id: str,
    role: str,
    unit_name: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed token carrying the identity claims.

    Args:
        user_id: Subject (sub claim).
        role: Role spelling (role claim); normalized on verification.
        unit_name: Organizational unit name (unit claim).
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {
        "sub": user_id,
        "role": role,
        "unit": unit_name,
        "exp": datetime.now(UTC) + expires_delta,
    }
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If token is invalid, expired, or missing sub/role/unit.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    for claim in REQUIRED_CLAIMS:
        if not payload.get(claim):
            raise ValueError(f"Token missing required claim: {claim}")
    return payload
