"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The subset of status codes the movie server can answer with.

    200 OK                    Search form, movie detail page, lookup failure page
    400 Bad Request           Malformed request line
    404 Not Found             No movie with that name, or no name at all
    408 Request Timeout       Client never finished its request line
    414 URI Too Long          Request line over the configured limit
    500 Internal Server Error Unexpected handler failure

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    IntEnum, so codes compare and format as integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'Not Found'
    """

    OK = 200

    BAD_REQUEST = 400
    NOT_FOUND = 404
    REQUEST_TIMEOUT = 408
    URI_TOO_LONG = 414

    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """
        Get the reason phrase for this status code.

            HTTP/1.1 404 Not Found
                     ─── ─────────
                      │      │
                      │      └── Reason phrase
                      └───────── Status code
        """
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.REQUEST_TIMEOUT: "Request Timeout",
    HTTPStatus.URI_TOO_LONG: "URI Too Long",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
