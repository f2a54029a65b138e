"""
=============================================================================
MIDDLEWARE BASE
=============================================================================

Middleware wraps the router with behaviour that applies to every request
(Chain of Responsibility):

    Request → LoggingMiddleware → router.handle → Response
                                                    │
    Response ← LoggingMiddleware ←──────────────────┘

Each middleware gets the request and a `next` callable standing for the
rest of the chain. It calls next(request) and may look at or change the
response on the way out.

=============================================================================
"""

from abc import ABC, abstractmethod
from functools import partial
from typing import Callable, List

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """One link of the chain around the router."""

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """Process the request, calling next(request) to continue the chain."""


class MiddlewarePipeline:
    """
    Ordered middleware around a final handler. First added = outermost.

        pipeline = MiddlewarePipeline().add(LoggingMiddleware())
        handler = pipeline.wrap(router.handle)
    """

    def __init__(self):
        self._chain: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        self._chain.append(middleware)
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """Bind each middleware to the handler after it, innermost first."""
        for middleware in reversed(self._chain):
            handler = partial(middleware, next=handler)
        return handler
