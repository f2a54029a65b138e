"""
=============================================================================
HTTP MODULE
=============================================================================

Just enough HTTP for the movie server:

- request.py: request line parsing and the movie name query parameter
- response.py: response model, builder and serialization
- router.py: target prefix routing with a fallback
- status_codes.py: the status codes the server answers with

=============================================================================
"""

from .request import (
    HTTPRequest,
    RequestParser,
    HTTPParseError,
    parse_request_line,
    extract_movie_name,
)
from .response import HTTPResponse, ResponseBuilder, html_page, format_http_date
from .router import Router, Route
from .status_codes import HTTPStatus

__all__ = [
    "HTTPRequest",
    "RequestParser",
    "HTTPParseError",
    "parse_request_line",
    "extract_movie_name",
    "HTTPResponse",
    "ResponseBuilder",
    "html_page",
    "format_http_date",
    "Router",
    "Route",
    "HTTPStatus",
]
