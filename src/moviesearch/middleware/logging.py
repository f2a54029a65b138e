"""
=============================================================================
ACCESS LOG MIDDLEWARE
=============================================================================

One log line per handled request, on the "moviesearch.access" logger so
it can be routed or silenced apart from the application log:

    text:  127.0.0.1 - - [16/Oct/2026:12:00:00 +0000] "GET /movie?name=Alien" 200 2411 153.20ms
    json:  {"request_id": "1f3a9c2e", "method": "GET", "target": "/movie?name=Alien", ...}

Each response is tagged with an X-Request-ID header carrying the same id
as the log line.

=============================================================================
"""

import json
import logging
import time
import uuid
from dataclasses import asdict, dataclass

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse
from .base import Middleware, NextHandler


logger = logging.getLogger("moviesearch.access")


@dataclass
class RequestLog:
    """Structured log entry for one request."""

    request_id: str
    method: str
    target: str
    client_ip: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        entry = asdict(self)
        entry["duration_ms"] = round(self.duration_ms, 2)
        return entry

    def to_text(self) -> str:
        """Apache-like access log line."""
        return (
            f'{self.client_ip or "-"} - - [{self.timestamp}] '
            f'"{self.method} {self.target}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


class LoggingMiddleware(Middleware):
    """
    Request logging middleware. Add it first so its timing covers the
    whole request, movie lookup included.

        pipeline.add(LoggingMiddleware(log_format="json"))
    """

    def __init__(self, log_format: str = "text"):
        self.log_format = log_format

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        try:
            response = next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.target} "
                f"- {type(e).__name__}: {e} ({duration_ms:.2f}ms)"
            )
            raise

        duration_ms = (time.time() - start_time) * 1000
        response.set_header("X-Request-ID", request_id)

        log_entry = RequestLog(
            request_id=request_id,
            method=request.method,
            target=request.target,
            client_ip=request.client_address[0],
            status_code=int(response.status),
            content_length=len(response.body),
            duration_ms=duration_ms,
            timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
        )

        if self.log_format == "json":
            logger.info(json.dumps(log_entry.to_dict()))
        else:
            logger.info(log_entry.to_text())

        return response
