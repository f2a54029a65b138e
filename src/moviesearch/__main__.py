"""
=============================================================================
MOVIESEARCH CLI ENTRY POINT
=============================================================================

    # Defaults (127.0.0.1:35000), API key from the environment or .env
    python -m moviesearch

    # Custom port, all interfaces
    python -m moviesearch --host 0.0.0.0 --port 8080

    # Explicit API key, verbose logs
    python -m moviesearch --api-key abc123 --log-level DEBUG

Exit status:

    0   stopped with Ctrl+C / SIGTERM
    1   the port could not be bound
    2   invalid arguments or configuration

=============================================================================
"""

import argparse
import sys

from . import __version__
from .config import LOG_FORMATS, ServerConfig
from .core import ServerStartError
from .server import MovieServer


def build_parser(defaults: ServerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moviesearch",
        description="Movie search web server built on raw sockets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m moviesearch                         # Run with defaults
  python -m moviesearch --port 8080             # Custom port
  python -m moviesearch --host 0.0.0.0          # Listen on all interfaces
  python -m moviesearch --api-key abc123        # OMDb key on the command line
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--host", "-H",
        default=defaults.host,
        help=f"Host to bind to (default: {defaults.host})",
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=defaults.port,
        help=f"Port to listen on (default: {defaults.port})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout,
        help="Seconds to wait for a client's request line (default: %(default)s)",
    )

    # ─────────────────────────────────────────────────────────────────────
    # MOVIE LOOKUP ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--api-key",
        default=defaults.omdb_api_key,
        help="OMDb API key (default: $OMDB_API_KEY)",
    )
    parser.add_argument(
        "--omdb-url",
        default=defaults.omdb_url,
        help="OMDb endpoint (default: %(default)s)",
    )
    parser.add_argument(
        "--lookup-timeout",
        type=float,
        default=defaults.lookup_timeout,
        help="Seconds to wait for OMDb (default: %(default)s)",
    )
    parser.add_argument(
        "--no-escape",
        action="store_true",
        help="Embed movie fields in the page without HTML-escaping them",
    )

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--log-format",
        default=defaults.log_format,
        choices=LOG_FORMATS,
        help="Access log format (default: %(default)s)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"moviesearch {__version__}",
    )
    return parser


def main(argv=None) -> int:
    """
    Main CLI entry point.

    Returns the process exit status.
    """
    try:
        defaults = ServerConfig.from_env()
    except ValueError as e:
        print(f"Invalid environment configuration: {e}", file=sys.stderr)
        return 2

    args = build_parser(defaults).parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=args.port,
        timeout=args.timeout,
        omdb_url=args.omdb_url,
        omdb_api_key=args.api_key,
        lookup_timeout=args.lookup_timeout,
        escape_html=not args.no_escape,
        log_level=args.log_level,
        log_format=args.log_format,
    )

    try:
        server = MovieServer(config)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        server.run()
    except ServerStartError as e:
        print(f"Could not listen on port: {config.port}. {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
