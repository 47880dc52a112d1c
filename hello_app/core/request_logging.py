"""
request_logging.py
------------------
Access-log middleware.

Responsibilities:
- Time every request
- Log method, path, status and duration on the shared logger
- Never change the response
"""

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from hello_app.core.logger import get_logger

logger = get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} | {response.status_code} | {duration_ms:.1f}ms"
        )
        return response
