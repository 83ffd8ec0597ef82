"""Validation utilities for URL expander."""

from urllib.parse import urlparse
from typing import Any, Tuple

MAX_URL_LENGTH = 2048


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(c.isspace() for c in url):
        return False, "URL must not contain whitespace"

    try:
        result = urlparse(url)

        # Check if scheme is http or https
        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"

        # Check if netloc (domain) exists
        if not result.hostname:
            return False, "URL must have a valid domain"

        # Accessing .port raises ValueError for out-of-range ports
        result.port

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_length(length: Any, min_length: int = 5, max_length: int = 1000) -> Tuple[bool, str]:
    """Validate a requested token length.

    Args:
        length: The requested length
        min_length: Smallest accepted length
        max_length: Largest accepted length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(length, bool) or not isinstance(length, int):
        return False, "Length must be an integer"

    if length < min_length:
        return False, f"Length must be at least {min_length}"

    if length > max_length:
        return False, f"Length must be at most {max_length}"

    return True, ""
