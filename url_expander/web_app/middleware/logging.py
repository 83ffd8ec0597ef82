"""Request logging middleware."""

import logging
import time
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ...common.logging_config import get_logger

# Health-check and asset traffic is logged at DEBUG
QUIET_PREFIXES = ("/health", "/api/health", "/css/")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request with status and duration."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        path = request.url.path
        level = logging.DEBUG if path.startswith(QUIET_PREFIXES) else logging.INFO
        client_ip = request.client.host if request.client else "unknown"
        self.logger.log(
            level,
            f"{request.method} {path} -> {response.status_code} "
            f"({duration_ms:.2f}ms) from {client_ip}",
        )

        return response
