"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket: line reading, a single response write,
and a guaranteed close.

=============================================================================
TCP IS A BYTE STREAM, NOT A MESSAGE PROTOCOL!
=============================================================================

A request sent as

    GET /movie?name=Alien HTTP/1.1\r\n
    Host: localhost:35000\r\n
    \r\n

may arrive in any split: "GET /mov" then "ie?name=Alien HTTP/1.1\r\nHo"...
So bytes are buffered and cut on "\n" here, never taken one recv() at a
time.

=============================================================================
WHEN DO WE STOP READING?
=============================================================================

Only the request line matters, but the rest of what the client sent is
read too, until the first of:

    1. end of input        the client shut down its side
    2. a blank line        end of the request head
    3. nothing pending     no buffered bytes and the socket has nothing
                           readable right now (select with 0 timeout)

The first line is waited for (up to `timeout`); after that the reader
never blocks. Bytes still in flight are drained by close().

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    ACCEPTED ──► READING_REQUEST ──► ROUTING ──┬──► FETCHING_DATA ──┐
                                               │                    ▼
                                               └──────────────► RENDERING
                                                                    │
                        CLOSED ◄──────────── WRITING ◄──────────────┘

Any failure jumps straight to CLOSED. CLOSED is terminal.

=============================================================================
"""

import logging
import select
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..http.request import HTTPParseError
from ..http.status_codes import HTTPStatus


logger = logging.getLogger(__name__)

# upper bound for reading leftover client bytes in close()
DRAIN_TIMEOUT = 0.5


class ConnectionState(Enum):
    """Connection lifecycle states."""

    ACCEPTED = "accepted"                # Just accepted, nothing read yet
    READING_REQUEST = "reading_request"  # Reading request lines
    ROUTING = "routing"                  # Request line parsed, picking a handler
    FETCHING_DATA = "fetching_data"      # Waiting on the movie lookup
    RENDERING = "rendering"              # Building the response body
    WRITING = "writing"                  # Sending the response
    CLOSED = "closed"                    # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Use as a context manager so the socket is released on every path:

        with Connection(socket=client_socket, address=client_address) as conn:
            lines = conn.read_request_lines()
            conn.send_response(response_bytes)
        # closed here, even if something above raised

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short unique identifier used in log lines.
        state: Current connection state.
        history: Every state the connection went through, in order.
    """

    socket: socket.socket
    address: Tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.ACCEPTED
    history: List[ConnectionState] = field(default_factory=lambda: [ConnectionState.ACCEPTED])
    created_at: float = field(default_factory=time.time)

    buffer_size: int = 4096
    timeout: Optional[float] = 30.0
    max_line_size: int = 8192

    _buffer: bytes = field(default=b"", repr=False)

    def __post_init__(self):
        self.socket.setblocking(True)
        if self.timeout:
            self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Seconds since the connection was accepted."""
        return time.time() - self.created_at

    def transition(self, state: ConnectionState) -> None:
        """Move to a new state. Nothing leaves CLOSED."""
        if self.state == ConnectionState.CLOSED:
            return
        self.state = state
        self.history.append(state)
        logger.debug(f"[{self.id}] → {state.value}")

    # =========================================================================
    # READING
    # =========================================================================

    def read_request_lines(self) -> List[str]:
        """
        Read the request lines the client has sent.

        Returns:
            Lines without their line terminators, request line first.
            An empty list when the client closed without sending anything.

        Raises:
            TimeoutError: The first line did not arrive within `timeout`.
            HTTPParseError: A line is longer than `max_line_size` (414).
        """
        self.transition(ConnectionState.READING_REQUEST)
        lines: List[str] = []

        try:
            while True:
                line = self._read_line()
                if line is None:
                    break  # end of input
                lines.append(line)
                if not line:
                    break  # blank line ends the head
                if not self._has_pending_data():
                    break
        except socket.timeout:
            if lines:
                return lines
            raise TimeoutError("Request read timeout")

        return lines

    def _read_line(self) -> Optional[str]:
        """
        Read one line from the buffer, pulling from the socket as needed.

        Accepts "\r\n" and bare "\n". A final unterminated line at end of
        input is returned as is. None means end of input with nothing left.
        """
        while True:
            newline = self._buffer.find(b"\n")
            if newline != -1:
                raw = self._buffer[:newline]
                self._buffer = self._buffer[newline + 1:]
                return self._decode(raw)

            if len(self._buffer) > self.max_line_size:
                raise HTTPParseError(
                    f"Request line exceeds {self.max_line_size} bytes",
                    status_code=HTTPStatus.URI_TOO_LONG,
                )

            chunk = self._recv()
            if not chunk:
                if self._buffer:
                    raw, self._buffer = self._buffer, b""
                    return self._decode(raw)
                return None

            self._buffer += chunk

    def _decode(self, raw: bytes) -> str:
        if len(raw) > self.max_line_size:
            raise HTTPParseError(
                f"Request line exceeds {self.max_line_size} bytes",
                status_code=HTTPStatus.URI_TOO_LONG,
            )
        return raw.rstrip(b"\r").decode("utf-8", errors="replace")

    def _has_pending_data(self) -> bool:
        """True if a line can be read without waiting on the network."""
        if self._buffer:
            return True
        try:
            readable, _, _ = select.select([self.socket], [], [], 0)
        except (OSError, ValueError):
            return False
        return bool(readable)

    def _recv(self) -> bytes:
        """socket.recv() that reports a reset peer as end of input."""
        try:
            return self.socket.recv(self.buffer_size)
        except (ConnectionResetError, BrokenPipeError):
            return b""

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send the whole response in one sendall().

        Returns:
            True if sent, False if the client went away.
        """
        self.transition(ConnectionState.WRITING)
        try:
            self.socket.sendall(data)
            return True
        except (ConnectionResetError, BrokenPipeError, OSError) as e:
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection gracefully. Safe to call more than once.

        1. shutdown(SHUT_WR) sends FIN: the client sees the end of the body.
        2. Drain what the client sent that was never read, so close()
           does not answer it with a RST that could eat our response.
           The drain stops after DRAIN_TIMEOUT seconds in total, however
           the client keeps sending.
        3. close() releases the file descriptor.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # peer already gone

        deadline = time.monotonic() + DRAIN_TIMEOUT
        try:
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                if not self.socket.recv(1024):
                    break
        except (socket.timeout, OSError):
            pass

        try:
            self.socket.close()
        except OSError:
            pass

        self.transition(ConnectionState.CLOSED)
        logger.debug(f"[{self.id}] Connection closed after {self.age:.3f}s")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
