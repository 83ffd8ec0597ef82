"""JSON API for URL expander."""

from .routes import router as api_router

__all__ = ["api_router"]
