"""
Unit tests for the prefix router.
"""

import pytest

from moviesearch.http.router import Router, Route
from moviesearch.http.request import HTTPRequest
from moviesearch.http.response import HTTPResponse, ResponseBuilder
from moviesearch.http.status_codes import HTTPStatus


def make_request(target: str, method: str = "GET") -> HTTPRequest:
    """Helper to create a request for testing."""
    return HTTPRequest(method=method, target=target)


def tagged_handler(tag: str):
    """Handler that answers with its tag as the body."""
    def handler(request: HTTPRequest) -> HTTPResponse:
        return ResponseBuilder().html(tag).build()
    return handler


@pytest.fixture
def router() -> Router:
    router = Router()
    router.add_prefix("/movie", tagged_handler("movie"), name="movie")
    router.fallback(tagged_handler("form"))
    return router


class TestRouter:
    """Tests for Router class."""

    def test_add_prefix(self):
        router = Router()
        route = router.add_prefix("/movie", tagged_handler("movie"), name="movie", fetches_data=True)

        assert isinstance(route, Route)
        assert router.routes == [route]
        assert route.fetches_data is True

    @pytest.mark.parametrize("target", [
        "/movie",
        "/movie?name=Alien",
        "/movies",
        "/movie/extra/segments",
    ])
    def test_movie_prefix(self, router, target):
        assert router.handle(make_request(target)).body == b"movie"

    @pytest.mark.parametrize("target", [
        "/",
        "",
        "/index.html",
        "/favicon.ico",
        "/Movie?name=Alien",
        "movie",
        "/search?movie=Alien",
    ])
    def test_everything_else_gets_fallback(self, router, target):
        assert router.handle(make_request(target)).body == b"form"

    @pytest.mark.parametrize("method", ["GET", "POST", "DELETE", "WHATEVER"])
    def test_method_is_ignored(self, router, method):
        assert router.handle(make_request("/movie?name=x", method)).body == b"movie"
        assert router.handle(make_request("/", method)).body == b"form"

    def test_first_registered_wins(self):
        router = Router()
        router.add_prefix("/movie", tagged_handler("first"))
        router.add_prefix("/movie/details", tagged_handler("second"))

        assert router.handle(make_request("/movie/details")).body == b"first"

    def test_match(self, router):
        assert router.match("/movie?name=x").name == "movie"
        assert router.match("/") is None

    def test_fallback_returns_handler(self):
        router = Router()
        handler = tagged_handler("form")

        assert router.fallback(handler) is handler

    def test_no_fallback(self):
        router = Router()
        response = router.handle(make_request("/"))

        assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR
