"""
Movie lookup: the record type, the client interface and its
implementations, and the errors a lookup can raise.
"""

from .client import MovieLookupClient, OMDbClient, StaticLookupClient, OMDB_BASE_URL
from .errors import (
    MovieLookupError,
    MovieNotFoundError,
    LookupTransportError,
    UpstreamResponseError,
)
from .record import MovieRecord

__all__ = [
    "MovieLookupClient",
    "OMDbClient",
    "StaticLookupClient",
    "OMDB_BASE_URL",
    "MovieLookupError",
    "MovieNotFoundError",
    "LookupTransportError",
    "UpstreamResponseError",
    "MovieRecord",
]
