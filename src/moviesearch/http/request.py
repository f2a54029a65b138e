"""
=============================================================================
REQUEST LINE PARSING
=============================================================================

The server only looks at the FIRST line of a request:

    GET /movie?name=Inception HTTP/1.1\r\n
    ─┬─ ──────────┬────────── ────┬───
     │            │               │
   Method       Target         Version
   (ignored)   (routing key)   (ignored)

Everything after it (headers, body) is read off the socket so the client
is not left blocked on a full buffer, then dropped. There is no header
semantics: no keep-alive, no Content-Length, no chunked bodies.

=============================================================================
WHAT COUNTS AS MALFORMED?
=============================================================================

    "GET / HTTP/1.1"      → ok
    "GET /movie"          → ok (version missing, nobody looks at it)
    "POST /"              → ok (method is never checked)
    "GET"                 → 400, only one token
    ""                    → 400, empty first line

=============================================================================
"""

from dataclasses import dataclass, field
from typing import List, Tuple
from urllib.parse import parse_qs, urlsplit

from .status_codes import HTTPStatus


class HTTPParseError(Exception):
    """
    Raised when the request line cannot be used.

    Carries the status code the server answers with before closing the
    connection (400 for a malformed line, 414 for an oversized one).
    """

    def __init__(self, message: str, status_code: int = HTTPStatus.BAD_REQUEST):
        super().__init__(message)
        self.status_code = HTTPStatus(status_code)


@dataclass
class HTTPRequest:
    """
    One request, derived from the request line.

    Created per connection and dropped once the response is written.

    Attributes:
        method:         First token of the request line. Kept for logging.
        target:         Path plus optional query string, the routing key.
        version:        Third token, "" when the client left it out.
        client_address: (ip, port) of the peer.
        raw_lines:      Every line read off the socket, request line first.
    """

    method: str
    target: str
    version: str = ""
    client_address: Tuple[str, int] = ("", 0)
    raw_lines: List[str] = field(default_factory=list, repr=False)


def parse_request_line(line: str) -> Tuple[str, str, str]:
    """
    Split a request line into (method, target, version).

    Tokens are whitespace separated. The version is "" when the line has
    only two tokens.

    Raises:
        HTTPParseError: Fewer than two tokens.
    """
    parts = line.split()
    if len(parts) < 2:
        raise HTTPParseError(f"Malformed request line: {line!r}")

    method, target = parts[0], parts[1]
    version = parts[2] if len(parts) > 2 else ""
    return method, target, version


def extract_movie_name(target: str) -> str:
    """
    Get the movie name from a "/movie?name=..." target.

    The value is URL-decoded and stripped. Returns "" when the name
    parameter is absent or blank.

        >>> extract_movie_name("/movie?name=The%20Matrix")
        'The Matrix'
        >>> extract_movie_name("/movie?name=star+wars")
        'star wars'
        >>> extract_movie_name("/movie")
        ''
    """
    values = parse_qs(urlsplit(target).query, keep_blank_values=True).get("name")
    if not values:
        return ""
    return values[0].strip()


class RequestParser:
    """Turns the lines read from a connection into an HTTPRequest."""

    def parse(
        self,
        lines: List[str],
        client_address: Tuple[str, int] = ("", 0),
    ) -> HTTPRequest:
        """
        Parse the request line. Lines after the first are kept on the
        request untouched.

        Raises:
            HTTPParseError: No lines, or a malformed first line.
        """
        if not lines or not lines[0].strip():
            raise HTTPParseError("Empty request line")

        method, target, version = parse_request_line(lines[0])

        return HTTPRequest(
            method=method,
            target=target,
            version=version,
            client_address=client_address,
            raw_lines=list(lines),
        )
