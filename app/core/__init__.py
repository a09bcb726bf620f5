"""Core: config, request context, and application bootstrap.

Single place for settings and app wiring helpers.
"""

from app.core.config import get_settings

__all__ = ["get_settings"]
