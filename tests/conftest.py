"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator, List, Optional

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from moviesearch import MovieServer, ServerConfig
from moviesearch.lookup import (
    LookupTransportError,
    MovieLookupClient,
    MovieRecord,
    StaticLookupClient,
)


@pytest.fixture
def inception() -> MovieRecord:
    """The record from the detail page scenario."""
    return MovieRecord(
        title="Inception",
        poster="http://x/p.jpg",
        released="2010",
        genre="Sci-Fi",
        director="Nolan",
        actors="DiCaprio",
        language="English",
        plot="A thief...",
    )


@pytest.fixture
def stub_client(inception: MovieRecord) -> StaticLookupClient:
    """Lookup client that only knows Inception."""
    return StaticLookupClient({"Inception": inception})


class RecordingClient(MovieLookupClient):
    """Lookup client that records queries and answers from a script."""

    def __init__(self, record: Optional[MovieRecord] = None, error: Optional[Exception] = None):
        self.record = record
        self.error = error
        self.queries: List[str] = []

    def fetch(self, query: str) -> MovieRecord:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.record


@pytest.fixture
def failing_client() -> RecordingClient:
    """Lookup client whose upstream is down."""
    return RecordingClient(error=LookupTransportError("connection refused", query="x"))


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def config(free_port: int) -> ServerConfig:
    """Test server configuration."""
    return ServerConfig(
        host="127.0.0.1",
        port=free_port,
        timeout=2.0,
        log_level="WARNING",
    )


class ServerThread:
    """Runs a MovieServer in a background thread."""

    def __init__(self, server: MovieServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.socket_server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def request(self, raw: bytes, timeout: float = 5.0) -> bytes:
        """Send raw bytes, return everything the server writes until it closes."""
        return send_raw(self.port, raw, timeout=timeout)


def send_raw(port: int, raw: bytes, timeout: float = 5.0) -> bytes:
    """Send raw bytes to 127.0.0.1:port and read until the server closes."""
    with socket.create_connection(("127.0.0.1", port), timeout=timeout) as s:
        if raw:
            s.sendall(raw)
        s.shutdown(socket.SHUT_WR)
        chunks = []
        while True:
            chunk = s.recv(4096)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


def split_response(data: bytes):
    """Split a raw response into (status_line, headers, body)."""
    head, _, body = data.partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(":")
        headers[name.strip()] = value.strip()
    return lines[0], headers, body.decode("utf-8")


@pytest.fixture
def running_server(config: ServerConfig, stub_client: StaticLookupClient) -> Generator[ServerThread, None, None]:
    """A live server backed by the stub lookup client."""
    srv = ServerThread(MovieServer(config, client=stub_client))
    srv.start()

    yield srv

    srv.stop()
