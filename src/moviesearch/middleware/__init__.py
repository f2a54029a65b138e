"""
Middleware pipeline wrapped around the router.

- Middleware / MiddlewarePipeline: the chain itself
- LoggingMiddleware: access log with request ids
"""

from .base import Middleware, MiddlewarePipeline, NextHandler
from .logging import LoggingMiddleware, RequestLog

__all__ = [
    "Middleware",
    "MiddlewarePipeline",
    "NextHandler",
    "LoggingMiddleware",
    "RequestLog",
]
