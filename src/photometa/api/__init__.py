"""HTTP API for photometa (visitor-count analytics proxy)."""

from photometa.api.app import app, get_reporter

__all__ = ["app", "get_reporter"]
