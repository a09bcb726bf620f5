"""Logging setup (stdout, request-id aware)."""

from app.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
