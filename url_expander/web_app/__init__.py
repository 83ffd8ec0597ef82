"""Web application for URL expander."""

from .app_factory import create_app

__all__ = ["create_app"]
