"""Request ID middleware.

Forwards a well-formed client X-Request-ID or generates one, echoes it on the
response and binds it to app.core.request_context for the duration of the
request so log lines carry it. Raw ASGI (no BaseHTTPMiddleware).
"""

import uuid
from typing import Callable

from app.core.request_context import current_request_id
from app.shared.utils.sanitization import validate_identifier


def _header(scope: dict, name: str) -> str | None:
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Client value when it is a safe identifier; otherwise a fresh UUID (no log injection)."""
    if raw is None:
        return str(uuid.uuid4())
    try:
        return validate_identifier(raw)
    except ValueError:
        return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Add or forward the request id header on each HTTP request and response."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = current_request_id.set(request_id)

        async def send_with_header(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((header_name.encode(), request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await app(scope, receive, send_with_header)
        finally:
            current_request_id.reset(token)

    return asgi_app
