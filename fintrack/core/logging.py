from __future__ import annotations

import logging
import re
import sys
import time
import uuid
from typing import Any, Dict

import structlog
from fastapi import Request


def _add_log_level(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    event_dict["level"] = method_name
    return event_dict


def configure_logging(env: str = "development") -> None:
    """Configure structlog for readable console logs to stdout.

    Development gets DEBUG output with colors; other environments log at INFO
    without ANSI colors so that log collectors get plain text.
    """
    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    is_dev = env == "development"

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_log_level,
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Configure standard logging to go through structlog
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if is_dev else logging.INFO,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=is_dev),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Per-user routes: /sms/users/{user_id}/...
_USER_PATH = re.compile(r"^/sms/users/([^/]+)/")


def request_log_context(request: Request) -> Dict[str, Any]:
    """Build the contextvars bound for the lifetime of one request."""
    path = request.url.path
    context: Dict[str, Any] = {
        "request_id": request.headers.get("x-request-id") or str(uuid.uuid4()),
        "path": path,
    }
    match = _USER_PATH.match(path)
    if match:
        context["user_id"] = match.group(1)
    return context


async def request_id_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Bind request_id (and user_id on per-user routes) into logs and time the request."""
    start = time.perf_counter()

    context = request_log_context(request)
    structlog.contextvars.bind_contextvars(**context)

    response = None
    try:
        response = await call_next(request)
    finally:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger = structlog.get_logger("request")
        logger.info(
            "request.completed",
            method=request.method,
            status=getattr(response, "status_code", 0) if response else 500,
            duration_ms=duration_ms,
        )
        structlog.contextvars.clear_contextvars()

    if response:
        response.headers["x-request-id"] = context["request_id"]
    return response
