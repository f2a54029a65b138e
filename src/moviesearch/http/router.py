"""
=============================================================================
PREFIX ROUTER
=============================================================================

The movie server routes on the raw target with plain prefix matching.
The method is never looked at, and nothing is split into segments:

    /movie?name=Alien    → movie handler
    /movies              → movie handler  (literal prefix "/movie")
    /movie               → movie handler  (no name: handled there)
    /                    → fallback (search form)
    /favicon.ico         → fallback (search form)
    ""                   → fallback (search form)

First registered prefix wins, so register longer prefixes first if two
of them overlap.

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .request import HTTPRequest
from .response import HTTPResponse, html_page
from .status_codes import HTTPStatus


logger = logging.getLogger(__name__)

Handler = Callable[[HTTPRequest], HTTPResponse]


@dataclass
class Route:
    """A handler bound to a literal target prefix."""

    prefix: str
    handler: Handler
    name: Optional[str] = None
    fetches_data: bool = False  # handler calls an external service

    def matches(self, target: str) -> bool:
        return target.startswith(self.prefix)


class Router:
    """
    Dispatches requests by target prefix.

        router = Router()

        router.add_prefix("/movie", movie_handler, fetches_data=True)
        router.fallback(search_form_handler)

        response = router.handle(request)
    """

    def __init__(self):
        self._routes: List[Route] = []
        self._fallback: Optional[Handler] = None

    def add_prefix(
        self,
        prefix: str,
        handler: Handler,
        name: Optional[str] = None,
        fetches_data: bool = False,
    ) -> Route:
        """Register a handler for targets starting with prefix."""
        route = Route(prefix=prefix, handler=handler, name=name, fetches_data=fetches_data)
        self._routes.append(route)
        logger.debug(f"Registered route {prefix!r} → {route.name or handler}")
        return route

    def fallback(self, handler: Handler) -> Handler:
        """Set the handler for targets no prefix matches."""
        self._fallback = handler
        return handler

    def match(self, target: str) -> Optional[Route]:
        """Return the first route whose prefix the target starts with."""
        for route in self._routes:
            if route.matches(target):
                return route
        return None

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """Dispatch a request to its handler."""
        route = self.match(request.target)
        if route is not None:
            return route.handler(request)

        if self._fallback is not None:
            return self._fallback(request)

        logger.error(f"No route for {request.target!r} and no fallback set")
        return html_page(
            "<h1>Internal Server Error</h1>",
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
        )

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)
