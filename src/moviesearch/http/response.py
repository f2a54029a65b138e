"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Every answer the server writes has the same shape:

    HTTP/1.1 200 OK\r\n                           ← Status line
    Content-Type: text/html; charset=utf-8\r\n
    Content-Length: 1234\r\n                      ← Auto-calculated
    Connection: close\r\n                         ← One request per connection
    Date: Fri, 16 Oct 2026 12:00:00 GMT\r\n       ← Auto-added
    Server: moviesearch/1.0\r\n                   ← Auto-added
    \r\n                                          ← Empty line
    <!DOCTYPE html>...                            ← Body

The connection is closed right after the body, so the close alone would
delimit it. Content-Length is sent anyway: browsers and XMLHttpRequest
then know the body is complete without waiting for the FIN.

=============================================================================
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict

from .status_codes import HTTPStatus


HTML_CONTENT_TYPE = "text/html; charset=utf-8"


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    A plain data container, built fresh for every request and never
    reused. ResponseBuilder is the more convenient way to make one.
    """

    status: HTTPStatus = HTTPStatus.OK
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """Status line, e.g. "HTTP/1.1 200 OK"."""
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    def set_header(self, name: str, value: str) -> "HTTPResponse":
        """Set a response header. Returns self for chaining."""
        self.headers[name] = value
        return self

    def to_bytes(self, server_name: str = "moviesearch/1.0") -> bytes:
        """
        Serialize the response for a single socket.sendall().

        Content-Length, Date and Server are filled in unless the caller
        already set them.
        """
        response_headers = dict(self.headers)

        if "Content-Length" not in response_headers:
            response_headers["Content-Length"] = str(len(self.body))

        if "Date" not in response_headers:
            response_headers["Date"] = format_http_date(datetime.now(timezone.utc))

        if "Server" not in response_headers:
            response_headers["Server"] = server_name

        lines = [self.status_line]
        for name, value in response_headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")

        header_bytes = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return header_bytes + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

        response = (ResponseBuilder()
            .status(HTTPStatus.NOT_FOUND)
            .html("<p>Pelicula no encontrada</p>")
            .close_connection()
            .build())
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._headers: Dict[str, str] = {}
        self._body = b""

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        """Set the response status code."""
        self._status = HTTPStatus(status)
        return self

    def html(self, html: str) -> "ResponseBuilder":
        """Set an HTML body with Content-Type text/html."""
        self._body = html.encode("utf-8")
        self._headers["Content-Type"] = HTML_CONTENT_TYPE
        return self

    def close_connection(self) -> "ResponseBuilder":
        """Tell the client the connection closes after this response."""
        self._headers["Connection"] = "close"
        return self

    def build(self) -> HTTPResponse:
        """Build the HTTPResponse."""
        return HTTPResponse(
            status=self._status,
            headers=dict(self._headers),
            body=self._body,
        )


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP date (RFC 7231 IMF-fixdate).

    Always English day and month names, always GMT:

        Fri, 16 Oct 2026 12:00:00 GMT
    """
    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
    dt = dt.astimezone(timezone.utc)
    return (
        f"{days[dt.weekday()]}, {dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )


def html_page(html: str, status: HTTPStatus = HTTPStatus.OK) -> HTTPResponse:
    """Shortcut for an HTML response that closes the connection."""
    return (ResponseBuilder()
        .status(status)
        .html(html)
        .close_connection()
        .build())
