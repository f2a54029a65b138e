"""
=============================================================================
LOW-LEVEL TCP SOCKET SERVER
=============================================================================

Owns the listening socket and the accept loop.

SOCKET LIFECYCLE (Server Side):
────────────────────────────────

    1. socket()    Create a TCP socket
    2. bind()      Reserve HOST:PORT       ← only fatal failure point
    3. listen()    Start queueing incoming connections
    4. accept()    Wait for a client, get a NEW socket just for it
    5. close()     Release the listening socket on shutdown

=============================================================================
ONE CLIENT AT A TIME
=============================================================================

    accept ─► handle(conn) ─► accept ─► handle(conn) ─► ...
               └─ runs to completion (connection closed)
                  before the next accept()

There is no thread pool: a slow client or a slow movie lookup makes
everyone else wait in the listen backlog. Nothing is shared between
connections, so there is nothing to lock.

A failed accept() or a handler that raises is logged and the loop goes
on. Only bind() can stop the server, and it does so before the loop
starts. Running out of file descriptors (EMFILE) adds a short pause
before the next accept().

=============================================================================
SHUTDOWN
=============================================================================

accept() times out every second so the loop can notice shutdown().
SIGINT (Ctrl+C) and SIGTERM (docker stop, kill) call shutdown() when the
server runs on the main thread; the previous handlers are restored on exit.

=============================================================================
"""

import errno
import logging
import signal
import socket
import threading
import time
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)

ACCEPT_BACKOFF = 0.1


class ServerStartError(OSError):
    """The listening socket could not be set up (port in use, no permission...)."""


class SocketServer:
    """
    Low-level TCP socket server.

        def handle_connection(conn: Connection):
            with conn:
                ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown()
    """

    def __init__(self, config: ServerConfig):
        self.config = config

        self._socket: Optional[socket.socket] = None
        self._running = False

        # set once the socket is listening, cleared again on shutdown
        self._ready_event = threading.Event()

        self._original_handlers: dict = {}

    @property
    def address(self) -> Tuple[str, int]:
        """
        The bound (host, port). With port 0 this is the port the OS
        picked, once the server is listening.
        """
        if self._socket is not None:
            host, port = self._socket.getsockname()[:2]
            return (host, port)
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        """Create and configure the listening socket."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Restart without waiting out TIME_WAIT on the old socket
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        # Responses go out in one sendall(), no point in Nagle batching
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

        # accept() wakes up every second to check self._running
        sock.settimeout(1.0)

        return sock

    def _setup_signals(self):
        """Install SIGTERM/SIGINT handlers. Only possible on the main thread."""
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, leaving signal handlers alone")
            return

        def shutdown_handler(signum, frame):
            signal_name = signal.Signals(signum).name
            logger.info(f"Received {signal_name}, initiating shutdown...")
            self.shutdown()

        self._original_handlers[signal.SIGTERM] = signal.signal(signal.SIGTERM, shutdown_handler)
        self._original_handlers[signal.SIGINT] = signal.signal(signal.SIGINT, shutdown_handler)

    def _restore_signals(self):
        for sig, handler in self._original_handlers.items():
            signal.signal(sig, handler)
        self._original_handlers.clear()

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and run the accept loop. Blocks until shutdown().

        Raises:
            ServerStartError: bind() or listen() failed.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
            self._socket.listen(self.config.backlog)
        except OSError as e:
            logger.error(f"Could not listen on {self.config.host}:{self.config.port}: {e}")
            self._socket.close()
            self._socket = None
            raise ServerStartError(e.errno, f"Could not listen on port {self.config.port}: {e.strerror or e}") from e

        self._running = True
        self._setup_signals()

        host, port = self.address
        logger.info(f"Server started. Listening on {host}:{port}...")
        self._ready_event.set()

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        """Accept one connection, handle it to completion, repeat."""
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if not self._running:
                    break
                logger.error(f"Accept error: {e}")
                if e.errno in (errno.EMFILE, errno.ENFILE):
                    time.sleep(ACCEPT_BACKOFF)
                continue

            logger.debug(f"Accepted connection from {client_address[0]}:{client_address[1]}")

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
                timeout=self.config.timeout,
                max_line_size=self.config.max_request_line,
            )

            try:
                connection_handler(conn)
            except Exception as e:
                logger.exception(f"[{conn.id}] Error handling client request: {e}")
            finally:
                conn.close()

    def shutdown(self):
        """Ask the accept loop to stop. Safe to call more than once."""
        logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        self._restore_signals()

        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass
            self._socket = None

        self._running = False
        self._ready_event.clear()
        logger.info("Socket server stopped")

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the socket is listening. False on timeout."""
        return self._ready_event.wait(timeout)

