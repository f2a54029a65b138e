"""Failures a movie lookup can report."""


class MovieLookupError(Exception):
    """Base class for every lookup failure."""

    def __init__(self, message: str, query: str = ""):
        super().__init__(message)
        self.query = query


class MovieNotFoundError(MovieLookupError):
    """The service answered, but has no movie with that name."""


class LookupTransportError(MovieLookupError):
    """The service could not be reached or answered with an HTTP error."""


class UpstreamResponseError(MovieLookupError):
    """The service answered with something that is not a movie record."""
