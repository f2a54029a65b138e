"""
=============================================================================
MOVIE SEARCH SERVER
=============================================================================

Ties the pieces together:

    SocketServer ──accept──► Connection
                                 │ read_request_lines()
                                 ▼
                           RequestParser ──► HTTPRequest
                                 │
                                 ▼
                LoggingMiddleware ─► Router
                                      ├── "/movie…" ─► MovieHandler ─► lookup client
                                      └── fallback  ─► SearchFormHandler
                                 │
                                 ▼
                           HTTPResponse.to_bytes() ─► send_response() ─► close

=============================================================================
WHAT CAN GO WRONG, AND WHAT THE CLIENT SEES
=============================================================================

    port in use / no permission   process exits with status 1 (serve())
    client sends nothing          connection closed, nothing sent
    malformed request line        400 page, connection closed
    request line too long         414 page, connection closed
    first line never arrives      408 page, connection closed
    movie not found, no name      404 page (MovieHandler)
    lookup service down           200 error page (MovieHandler)
    accept() fails                logged, next accept()
    handler bug                   500 page, traceback in the log
    client vanished mid-write     logged, connection closed

Nothing in this list stops the accept loop except the first line.

=============================================================================
"""

import logging
import sys
from typing import Optional

from .config import ServerConfig
from .core import Connection, ConnectionState, ServerStartError, SocketServer
from .handlers import MovieHandler, SearchFormHandler, render_message_page
from .http import (
    HTTPParseError,
    HTTPRequest,
    HTTPResponse,
    HTTPStatus,
    RequestParser,
    Router,
    html_page,
)
from .lookup import MovieLookupClient, OMDbClient
from .middleware import LoggingMiddleware, MiddlewarePipeline


logger = logging.getLogger(__name__)

MOVIE_PREFIX = "/movie"


class MovieServer:
    """
    Single-threaded movie search server.

        server = MovieServer(ServerConfig(port=35000), client=OMDbClient(api_key="..."))
        server.run()  # Blocks until Ctrl+C

    Without a client, an OMDbClient is built from the config.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        client: Optional[MovieLookupClient] = None,
    ):
        self.config = config or ServerConfig()
        self.config.validate()

        self.client = client or OMDbClient(
            api_key=self.config.omdb_api_key,
            base_url=self.config.omdb_url,
            timeout=self.config.lookup_timeout,
        )

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()

        self._router = Router()
        self._router.add_prefix(
            MOVIE_PREFIX,
            MovieHandler(self.client, escape=self.config.escape_html),
            name="movie",
            fetches_data=True,
        )
        self._router.fallback(SearchFormHandler())

        self._middleware = MiddlewarePipeline()
        self._middleware.add(LoggingMiddleware(log_format=self.config.log_format))
        self._handler = None

    @property
    def router(self) -> Router:
        return self._router

    @property
    def socket_server(self) -> SocketServer:
        return self._socket_server

    @property
    def address(self):
        return self._socket_server.address

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Start the server (blocking).

        Raises:
            ServerStartError: The port could not be bound.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        self._setup_logging()
        self._handler = self._middleware.wrap(self._router.handle)

        try:
            self._socket_server.start(self._process_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self.client.close()
            logger.info("Server stopped")

    def shutdown(self):
        """Stop accepting connections. The current one is finished first."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("moviesearch").setLevel(level)

    def _process_connection(self, conn: Connection):
        """
        Handle one connection start to finish.

        Every fault is caught here; the accept loop only ever sees this
        method return.
        """
        with conn:
            try:
                lines = conn.read_request_lines()
                if not lines:
                    logger.debug(f"[{conn.id}] Client closed without sending a request")
                    return

                request = self._parser.parse(lines, conn.address)
                response = self.handle_request(request, conn)
                conn.send_response(response.to_bytes(self.config.server_name))

            except HTTPParseError as e:
                logger.warning(f"[{conn.id}] Bad request from {conn.client_ip}: {e}")
                self._send_error(conn, e.status_code, str(e))
            except TimeoutError:
                logger.warning(f"[{conn.id}] Timed out waiting for the request line")
                self._send_error(conn, HTTPStatus.REQUEST_TIMEOUT, "Request timeout")
            except OSError as e:
                logger.error(f"[{conn.id}] Error handling client request: {e}")
            except Exception as e:
                logger.exception(f"[{conn.id}] Connection error: {e}")

    def handle_request(
        self,
        request: HTTPRequest,
        conn: Optional[Connection] = None,
    ) -> HTTPResponse:
        """
        Route a parsed request through middleware and handler.

        Handler exceptions become a 500 page. Usable without a socket,
        which is how the routing is unit tested.
        """
        if self._handler is None:
            self._handler = self._middleware.wrap(self._router.handle)

        if conn is not None:
            conn.transition(ConnectionState.ROUTING)
            route = self._router.match(request.target)
            if route is not None and route.fetches_data:
                conn.transition(ConnectionState.FETCHING_DATA)
            else:
                conn.transition(ConnectionState.RENDERING)

        try:
            response = self._handler(request)
        except Exception as e:
            tag = f"[{conn.id}] " if conn is not None else ""
            logger.exception(f"{tag}Handler error: {e}")
            response = html_page(
                render_message_page("Error", "Ocurrio un error inesperado."),
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
            )

        if conn is not None and conn.state == ConnectionState.FETCHING_DATA:
            conn.transition(ConnectionState.RENDERING)
        return response

    def _send_error(self, conn: Connection, status: HTTPStatus, message: str):
        """Answer before a handler ran (parse errors, timeouts)."""
        status = HTTPStatus(status)
        response = html_page(render_message_page(status.phrase, message), status=status)
        conn.send_response(response.to_bytes(self.config.server_name))


def create_app(
    config: Optional[ServerConfig] = None,
    client: Optional[MovieLookupClient] = None,
) -> MovieServer:
    """Factory for a configured MovieServer."""
    return MovieServer(config, client)


def serve(
    port: int,
    client: Optional[MovieLookupClient] = None,
    config: Optional[ServerConfig] = None,
) -> None:
    """
    Run the server on `port` until interrupted.

    A port that cannot be bound is fatal: the cause is logged and printed,
    and the process exits with status 1.
    """
    config = config or ServerConfig.from_env()
    config.port = port
    server = MovieServer(config, client)

    try:
        server.run()
    except ServerStartError as e:
        logger.error(f"Could not start server: {e}")
        print(f"Could not listen on port: {port}. {e}", file=sys.stderr)
        sys.exit(1)
