"""Request context: the current request ID for log correlation.

RequestIDMiddleware sets the value for each HTTP request; the logging
filter in app.shared.telemetry.logging reads it so every log line of a
request carries the same id.
"""

from contextvars import ContextVar

# Current request ID (set by middleware, read by the logging filter).
current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def get_request_id() -> str | None:
    """Return the current request ID if set."""
    return current_request_id.get()
