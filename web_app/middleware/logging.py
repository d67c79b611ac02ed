"""Request logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request: method, path, client, status and latency.

    Server errors are logged at WARNING so failed key generation stands out
    from ordinary redirects and misses. Exceptions escaping the app are
    logged with their traceback and re-raised.
    """

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("shorty.web")

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)
        except Exception:
            self.logger.exception(
                "%s %s from %s - unhandled error after %.2fms",
                request.method, request.url.path, client_ip,
                (time.perf_counter() - started) * 1000,
            )
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            "%s %s from %s - %d in %.2fms",
            request.method, request.url.path, client_ip,
            response.status_code, (time.perf_counter() - started) * 1000,
        )

        return response
