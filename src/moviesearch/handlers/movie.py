"""
=============================================================================
PAGE HANDLERS
=============================================================================

    MovieHandler        /movie...   lookup + detail page
    SearchFormHandler   everything  fixed search form

=============================================================================
MOVIE HANDLER OUTCOMES
=============================================================================

    name missing or blank          → 404 "Falta el nombre", no lookup
    lookup returns a record        → 200 detail page
    MovieNotFoundError             → 404 "Pelicula no encontrada"
    any other MovieLookupError     → 200 "Servicio no disponible"

Lookup failures never leave the handler: the client always gets an HTML
page it can splice into the search form. The XMLHttpRequest on the form
shows whatever body comes back, so an unreachable lookup service is
answered like any other page, and only the log tells it apart.

=============================================================================
"""

import logging

from ..http.request import HTTPRequest, extract_movie_name
from ..http.response import HTTPResponse, html_page
from ..http.status_codes import HTTPStatus
from ..lookup.client import MovieLookupClient
from ..lookup.errors import MovieLookupError, MovieNotFoundError
from .pages import render_message_page, render_movie_page, render_search_form


logger = logging.getLogger(__name__)


class MovieHandler:
    """
    Looks the requested movie up and renders its detail page.

        handler = MovieHandler(OMDbClient(api_key="..."))
        router.add_prefix("/movie", handler)
    """

    def __init__(self, client: MovieLookupClient, escape: bool = True):
        self.client = client
        self.escape = escape

    def __call__(self, request: HTTPRequest) -> HTTPResponse:
        return self.handle(request)

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        name = extract_movie_name(request.target)
        if not name:
            return html_page(
                render_message_page(
                    "Falta el nombre",
                    "Escribe el nombre de una pelicula para buscarla.",
                ),
                status=HTTPStatus.NOT_FOUND,
            )

        try:
            record = self.client.fetch(name)
        except MovieNotFoundError as e:
            logger.info(f"No movie found for {name!r}: {e}")
            return html_page(
                render_message_page(
                    "Pelicula no encontrada",
                    f"No encontramos ninguna pelicula llamada \"{name}\".",
                ),
                status=HTTPStatus.NOT_FOUND,
            )
        except MovieLookupError as e:
            logger.error(f"Movie lookup failed for {name!r}: {e}")
            return html_page(
                render_message_page(
                    "Servicio no disponible",
                    "No pudimos consultar la informacion de la pelicula. "
                    "Intenta de nuevo mas tarde.",
                ),
            )

        missing = record.missing_fields()
        if missing:
            logger.debug(f"Record for {name!r} has no {', '.join(missing)}")

        return html_page(render_movie_page(record, escape=self.escape))


class SearchFormHandler:
    """Answers every request with the fixed search form."""

    def __call__(self, request: HTTPRequest) -> HTTPResponse:
        return html_page(render_search_form())
