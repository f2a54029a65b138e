"""
=============================================================================
MOVIE LOOKUP CLIENTS
=============================================================================

The server only needs one call:

    record = client.fetch("Inception")      # MovieRecord
                                            # or raises MovieLookupError

Two implementations:

    OMDbClient          Asks the OMDb API (https://www.omdbapi.com/) by
                        title. One GET per lookup, no retries, no cache.

    StaticLookupClient  Answers from an in-memory dict. For offline runs
                        and tests.

=============================================================================
FAILURE MAPPING (OMDb)
=============================================================================

    connection refused / DNS / timeout   → LookupTransportError
    HTTP 4xx / 5xx                       → LookupTransportError
    body is not JSON, or not an object   → UpstreamResponseError
    {"Response": "False", "Error": ...}  → MovieNotFoundError

OMDb also reports a bad API key with Response=False; that surfaces as
MovieNotFoundError carrying OMDb's own message ("Invalid API key!"),
which is what the log shows.

=============================================================================
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

import requests

from .errors import (
    LookupTransportError,
    MovieNotFoundError,
    UpstreamResponseError,
)
from .record import MovieRecord


logger = logging.getLogger(__name__)

OMDB_BASE_URL = "https://www.omdbapi.com/"


class MovieLookupClient(ABC):
    """Resolves a free-text movie name to a MovieRecord."""

    @abstractmethod
    def fetch(self, query: str) -> MovieRecord:
        """
        Look a movie up by name.

        Raises:
            MovieNotFoundError: No movie matches.
            MovieLookupError: Any other failure.
        """

    def close(self) -> None:
        """Release whatever the client holds. Nothing by default."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class OMDbClient(MovieLookupClient):
    """
    Movie lookup through the OMDb API.

    Uses one requests.Session for the life of the client, so lookups
    reuse the TCP/TLS connection to OMDb.

        with OMDbClient(api_key="abc123") as client:
            record = client.fetch("Inception")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = OMDB_BASE_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._session = session or requests.Session()

        if not api_key:
            logger.warning("No OMDb API key configured, lookups will be rejected upstream")

    def _params(self, query: str) -> Dict[str, str]:
        params = {"t": query}
        if self.api_key:
            params["apikey"] = self.api_key
        return params

    def fetch(self, query: str) -> MovieRecord:
        logger.debug(f"OMDb lookup for {query!r}")

        try:
            response = self._session.get(
                self.base_url,
                params=self._params(query),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise LookupTransportError(f"OMDb request failed: {e}", query=query) from e

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamResponseError(f"OMDb answered with invalid JSON: {e}", query=query) from e

        return self._to_record(data, query)

    def _to_record(self, data: Any, query: str) -> MovieRecord:
        if not isinstance(data, Mapping):
            raise UpstreamResponseError(
                f"OMDb answered with {type(data).__name__}, expected an object",
                query=query,
            )

        if str(data.get("Response", "True")).lower() == "false":
            message = data.get("Error") or "Movie not found!"
            raise MovieNotFoundError(message, query=query)

        return MovieRecord.from_mapping(data)

    def close(self) -> None:
        self._session.close()


class StaticLookupClient(MovieLookupClient):
    """
    Answers lookups from a fixed set of records.

    Names are matched case-insensitively against the keys given, and
    against each record's title.
    """

    def __init__(self, records: Optional[Mapping[str, MovieRecord]] = None):
        self._records: Dict[str, MovieRecord] = {}
        for name, record in (records or {}).items():
            self.add(record, name=name)

    def add(self, record: MovieRecord, name: Optional[str] = None) -> None:
        for key in (name, record.title):
            if key:
                self._records[key.strip().lower()] = record

    def fetch(self, query: str) -> MovieRecord:
        record = self._records.get(query.strip().lower())
        if record is None:
            raise MovieNotFoundError("Movie not found!", query=query)
        return record
