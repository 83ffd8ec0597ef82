"""Per-request helpers shared by the API and web routes."""

from typing import Mapping, Optional

from starlette.requests import Request


def first_hop(value: Optional[str]) -> Optional[str]:
    """First entry of a comma-separated proxy header, as set by the outermost proxy."""
    if not value:
        return None
    return value.split(",")[0].strip() or None


def derive_base_url(headers: Mapping[str, str], scheme: str, fallback_base_url: str) -> str:
    """Base URL as the client saw it.

    X-Forwarded-Proto plus X-Forwarded-Host win, then the Host header,
    then the configured base URL. ``headers`` must be case-insensitive
    (Starlette ``Headers``) or lower-cased.
    """
    proto = first_hop(headers.get("x-forwarded-proto"))
    forwarded_host = first_hop(headers.get("x-forwarded-host"))
    if proto and forwarded_host:
        return f"{proto}://{forwarded_host}"

    host = headers.get("host")
    if host:
        return f"{proto or scheme}://{host}"

    return fallback_base_url.rstrip("/")


def request_base_url(request: Request) -> Optional[str]:
    """Base URL override for this request.

    None means "use the configured base URL"; that is always the answer
    unless ``use_request_base_url`` is enabled.
    """
    config = request.app.state.config
    if not config.use_request_base_url:
        return None

    return derive_base_url(request.headers, request.url.scheme, config.base_url)
