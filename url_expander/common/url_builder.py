"""URL building utilities for URL expander."""

from typing import Optional


def build_expanded_url(token: str, base_url: str) -> str:
    """Build complete expanded URL.

    Args:
        token: The random token
        base_url: Base URL (e.g., https://example.com)

    Returns:
        Complete expanded URL (base_url + "/" + token)
    """
    return f"{base_url.rstrip('/')}/{token}"


def extract_token(expanded_url: str, base_url: str) -> Optional[str]:
    """Pull the token back out of an expanded URL.

    Returns None when the URL does not start with ``base_url``.
    """
    prefix = f"{base_url.rstrip('/')}/"
    if not expanded_url.startswith(prefix):
        return None
    token = expanded_url[len(prefix):]
    return token or None
