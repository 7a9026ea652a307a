from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from typing import Any, Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from keycheck.core.redact import redact_text


class JsonFormatter(logging.Formatter):
    """One JSON object per record; key-like tokens in the message and traceback are redacted."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": redact_text(record.getMessage()),
        }
        if hasattr(record, "extra") and isinstance(record.extra, dict):
            for key, value in record.extra.items():  # type: ignore[union-attr]
                payload[key] = redact_text(value) if isinstance(value, str) else value
        if record.exc_info:
            payload["exc_info"] = redact_text(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure application-wide structured logging."""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    # Remove default handlers that may have been set by libraries.
    root.handlers.clear()
    root.addHandler(handler)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that adds correlation IDs and basic request logging."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        correlation_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        # Put the correlation id in the state so handlers can reuse it.
        request.state.correlation_id = correlation_id

        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        response.headers["x-request-id"] = correlation_id

        logging.getLogger("keycheck.request").info(
            "HTTP request",
            extra={
                "extra": {
                    "correlation_id": correlation_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": int(duration * 1000),
                }
            },
        )

        return response


def log_with_correlation(
    logger: logging.Logger,
    request: Request,
    level: int,
    message: str,
    **fields: Any,
) -> None:
    """Helper to emit a log with the request's correlation id."""

    correlation_id = getattr(request.state, "correlation_id", None)
    extra = {"correlation_id": correlation_id}
    extra.update(fields)
    logger.log(level, message, extra={"extra": extra})


__all__ = [
    "JsonFormatter",
    "RequestContextMiddleware",
    "configure_logging",
    "log_with_correlation",
]
