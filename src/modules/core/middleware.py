"""Request correlation for structured logs.

Each request carries one correlation id through every log line it
produces and back to the caller in ``X-Request-ID``.
"""

import re
import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

# Caller-supplied ids are accepted only as plain tokens.
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._:-]{1,128}")

logger = structlog.get_logger(__name__)


def resolve_request_id(header_value: str | None) -> str:
    """Return the caller's id when it is a plain token, else a fresh UUID4."""
    if header_value and REQUEST_ID_PATTERN.fullmatch(header_value):
        return header_value
    return str(uuid.uuid4())


class CorrelationIdMiddleware:
    """Binds ``correlation_id`` for the duration of a request.

    Reads ``X-Request-ID`` (generating one when it is missing or not a
    plain token), binds it into the structlog context together with the
    request method, and logs one line when the request finishes.  Server
    errors are logged at error level, client errors at warning level.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = resolve_request_id(request.META.get("HTTP_X_REQUEST_ID"))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid, method=request.method)
        start = time.monotonic()

        response = self.get_response(request)

        duration_ms = round((time.monotonic() - start) * 1000, 2)
        log = logger.bind(
            path=request.path, status_code=response.status_code, duration_ms=duration_ms
        )
        if response.status_code >= 500:
            log.error("request.finished")
        elif response.status_code >= 400:
            log.warning("request.finished")
        else:
            log.info("request.finished")

        structlog.contextvars.clear_contextvars()
        response["X-Request-ID"] = cid
        return response
