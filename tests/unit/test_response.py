"""
Unit tests for HTTP response building.
"""

from datetime import datetime, timezone

from moviesearch.http.response import (
    HTTPResponse,
    ResponseBuilder,
    format_http_date,
    html_page,
)
from moviesearch.http.status_codes import HTTPStatus


class TestHTTPResponse:
    """Tests for HTTPResponse class."""

    def test_status_line(self):
        assert HTTPResponse(status=HTTPStatus.OK).status_line == "HTTP/1.1 200 OK"
        assert HTTPResponse(status=HTTPStatus.NOT_FOUND).status_line == "HTTP/1.1 404 Not Found"
        assert HTTPResponse(status=HTTPStatus.REQUEST_TIMEOUT).status_line == "HTTP/1.1 408 Request Timeout"

    def test_to_bytes_layout(self):
        response = HTTPResponse(
            headers={"Content-Type": "text/html"},
            body=b"<p>hi</p>",
        )

        result = response.to_bytes()

        assert result.startswith(b"HTTP/1.1 200 OK\r\n")
        assert b"Content-Type: text/html\r\n" in result
        assert b"Content-Length: 9\r\n" in result
        assert b"Server: moviesearch/1.0\r\n" in result
        assert result.endswith(b"\r\n\r\n<p>hi</p>")

    def test_to_bytes_counts_encoded_length(self):
        response = ResponseBuilder().html("Amélie").build()
        assert b"Content-Length: 7\r\n" in response.to_bytes()

    def test_explicit_headers_win(self):
        response = HTTPResponse(headers={"Server": "custom"})
        result = response.to_bytes(server_name="ignored")

        assert b"Server: custom\r\n" in result
        assert b"ignored" not in result

    def test_set_header_chaining(self):
        response = HTTPResponse().set_header("X-One", "1").set_header("X-Two", "2")
        assert response.headers == {"X-One": "1", "X-Two": "2"}


class TestResponseBuilder:
    """Tests for ResponseBuilder class."""

    def test_html_body(self):
        response = ResponseBuilder().html("<h1>x</h1>").build()

        assert response.headers["Content-Type"] == "text/html; charset=utf-8"
        assert response.body == b"<h1>x</h1>"

    def test_status_and_close(self):
        response = (ResponseBuilder()
            .status(HTTPStatus.NOT_FOUND)
            .close_connection()
            .build())

        assert response.status == 404
        assert response.headers["Connection"] == "close"

    def test_builds_are_independent(self):
        builder = ResponseBuilder().html("<p>x</p>")
        first = builder.build()
        first.set_header("X-B", "2")

        assert "X-B" not in builder.build().headers

    def test_html_page_shortcut(self):
        response = html_page("<p>x</p>", status=HTTPStatus.BAD_REQUEST)

        assert response.status == HTTPStatus.BAD_REQUEST
        assert response.headers["Connection"] == "close"
        assert response.headers["Content-Type"].startswith("text/html")


def test_format_http_date():
    dt = datetime(2026, 10, 16, 9, 5, 3, tzinfo=timezone.utc)
    assert format_http_date(dt) == "Fri, 16 Oct 2026 09:05:03 GMT"
