"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the movie search server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m moviesearch --port 3000                         │
    │                                                                      │
    │   2. Environment variables (a .env file is loaded first)            │
    │      └── MOVIESEARCH_PORT=3000 python -m moviesearch               │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The OMDb API key is a secret: keep it in the environment or in a
gitignored .env file, never in code.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv


LOG_FORMATS = ("text", "json")


@dataclass
class ServerConfig:
    """
    Configuration for the movie search server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, timeout, max_request_line

    MOVIE LOOKUP
    - omdb_url, omdb_api_key, lookup_timeout

    RENDERING
    - escape_html

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only (development)
    - "0.0.0.0" - All network interfaces (containers)
    """

    port: int = 35000
    """
    The port number to listen on. 0 lets the OS pick a free port.
    """

    backlog: int = 16
    """
    Maximum number of queued connections. Clients are served one at a
    time, so the queue is where everybody else waits.
    """

    buffer_size: int = 4096
    """Size of each recv() call in bytes."""

    timeout: Optional[float] = 30.0
    """
    Per-connection socket timeout in seconds.
    None = blocking. A silent client stalls every other client then.
    """

    max_request_line: int = 8192
    """Longest accepted line of the request, in bytes."""

    # ─────────────────────────────────────────────────────────────────────
    # MOVIE LOOKUP
    # ─────────────────────────────────────────────────────────────────────

    omdb_url: str = "https://www.omdbapi.com/"
    omdb_api_key: Optional[str] = None
    lookup_timeout: float = 10.0

    # ─────────────────────────────────────────────────────────────────────
    # RENDERING
    # ─────────────────────────────────────────────────────────────────────

    escape_html: bool = True
    """
    HTML-escape values coming from the movie lookup before embedding
    them in the detail page. False interpolates them raw.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    log_format: str = "text"
    """Access log format: 'text' (Apache-like) or 'json'."""

    server_name: str = "moviesearch/1.0"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        MOVIESEARCH_HOST        Server host (default: 127.0.0.1)
        MOVIESEARCH_PORT        Server port (default: 35000)
        MOVIESEARCH_TIMEOUT     Connection timeout in seconds (default: 30)
        MOVIESEARCH_LOG_LEVEL   Logging level (default: INFO)
        MOVIESEARCH_LOG_FORMAT  Access log format (default: text)
        OMDB_API_KEY            OMDb API key (default: unset)
        OMDB_URL                OMDb endpoint
        OMDB_TIMEOUT            Lookup timeout in seconds (default: 10)

        A .env file in the working directory is loaded first; variables
        already present in the environment win.

        =====================================================================
        """
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            host=os.getenv("MOVIESEARCH_HOST", "127.0.0.1"),
            port=int(os.getenv("MOVIESEARCH_PORT", "35000")),
            timeout=float(os.getenv("MOVIESEARCH_TIMEOUT", "30")),
            omdb_url=os.getenv("OMDB_URL", "https://www.omdbapi.com/"),
            omdb_api_key=os.getenv("OMDB_API_KEY") or None,
            lookup_timeout=float(os.getenv("OMDB_TIMEOUT", "10")),
            log_level=os.getenv("MOVIESEARCH_LOG_LEVEL", "INFO"),
            log_format=os.getenv("MOVIESEARCH_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at server construction so a bad value fails at startup,
        not on the first request.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.lookup_timeout <= 0:
            raise ValueError("lookup_timeout must be > 0")

        if self.buffer_size < 512:
            raise ValueError("buffer_size must be >= 512")

        if self.max_request_line < 64:
            raise ValueError("max_request_line must be >= 64")

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log_format: {self.log_format!r}. "
                f"Must be one of {', '.join(LOG_FORMATS)}."
            )
