"""Middleware for URL expander web app."""

from .logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
