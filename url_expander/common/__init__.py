"""Common utilities for URL expander."""

from .validators import is_valid_url, is_valid_length
from .url_builder import build_expanded_url, extract_token
from .logging_config import JsonFormatter, setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_length",
    "build_expanded_url",
    "extract_token",
    "JsonFormatter",
    "setup_logging",
    "get_logger",
]
