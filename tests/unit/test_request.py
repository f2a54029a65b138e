"""
Unit tests for request line parsing.
"""

import pytest

from moviesearch.http.request import (
    RequestParser,
    HTTPParseError,
    parse_request_line,
    extract_movie_name,
)
from moviesearch.http.status_codes import HTTPStatus


class TestParseRequestLine:
    """Tests for parse_request_line()."""

    def test_full_request_line(self):
        assert parse_request_line("GET /movie?name=Alien HTTP/1.1") == (
            "GET", "/movie?name=Alien", "HTTP/1.1",
        )

    def test_version_is_optional(self):
        assert parse_request_line("GET /") == ("GET", "/", "")

    def test_method_is_not_validated(self):
        method, target, _ = parse_request_line("BREW /movie?name=x HTTP/1.1")
        assert method == "BREW"
        assert target == "/movie?name=x"

    def test_extra_whitespace(self):
        assert parse_request_line("  POST   /   HTTP/1.0  ") == ("POST", "/", "HTTP/1.0")

    @pytest.mark.parametrize("line", ["GET", "", "   "])
    def test_fewer_than_two_tokens(self, line):
        with pytest.raises(HTTPParseError) as exc_info:
            parse_request_line(line)

        assert exc_info.value.status_code == HTTPStatus.BAD_REQUEST


class TestRequestParser:
    """Tests for RequestParser."""

    def test_parse_keeps_lines_and_address(self):
        lines = ["GET /movie?name=Alien HTTP/1.1", "Host: localhost", ""]
        request = RequestParser().parse(lines, ("127.0.0.1", 4242))

        assert request.method == "GET"
        assert request.target == "/movie?name=Alien"
        assert request.version == "HTTP/1.1"
        assert request.client_address == ("127.0.0.1", 4242)
        assert request.raw_lines == lines

    def test_headers_are_ignored(self):
        request = RequestParser().parse(["GET / HTTP/1.1", "garbage without colon"])
        assert request.target == "/"

    def test_no_lines(self):
        with pytest.raises(HTTPParseError):
            RequestParser().parse([])

    def test_empty_first_line(self):
        with pytest.raises(HTTPParseError) as exc_info:
            RequestParser().parse(["", "GET / HTTP/1.1"])

        assert exc_info.value.status_code == 400

    def test_single_token(self):
        with pytest.raises(HTTPParseError):
            RequestParser().parse(["GET"])


class TestExtractMovieName:
    """Tests for extract_movie_name()."""

    def test_plain_name(self):
        assert extract_movie_name("/movie?name=Inception") == "Inception"

    def test_percent_encoded(self):
        assert extract_movie_name("/movie?name=The%20Matrix") == "The Matrix"

    def test_plus_is_space(self):
        assert extract_movie_name("/movie?name=star+wars") == "star wars"

    def test_unicode(self):
        assert extract_movie_name("/movie?name=Am%C3%A9lie") == "Amélie"

    def test_other_params_ignored(self):
        assert extract_movie_name("/movie?y=1999&name=Matrix") == "Matrix"

    @pytest.mark.parametrize("target", ["/movie", "/movie?", "/movie?name=", "/movie?title=x", "/movie?name=%20"])
    def test_absent_or_blank(self, target):
        assert extract_movie_name(target) == ""

