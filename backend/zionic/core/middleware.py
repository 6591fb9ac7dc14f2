"""Middlewares HTTP de la API."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from zionic.core.logging import get_logger

logger = get_logger("zionic.request")


def _client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Registra inicio, fin y fallas de cada request con un ``request_id``.

    Reutiliza el ``x-request-id`` entrante cuando el proxy ya lo asignó.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid4().hex
        start = time.perf_counter()
        fields = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "client_ip": _client_ip(request),
        }

        logger.debug("request.started", extra=fields)

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                "request.failed", extra={**fields, "duration_ms": round(duration_ms, 2)}
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["x-request-id"] = request_id
        logger.info(
            "request.completed",
            extra={
                **fields,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
