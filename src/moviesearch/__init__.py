"""
=============================================================================
MOVIESEARCH
=============================================================================

A small movie search web server on raw sockets.

    GET /                      → search form ("Buscador de peliculas")
    GET /movie?name=Inception  → detail page from the OMDb API

No framework and no http.server: the socket handling and the request line
parsing are done by hand, one client at a time.

=============================================================================
QUICK START
=============================================================================

    $ export OMDB_API_KEY=...
    $ python -m moviesearch --port 35000

Or from code:

    from moviesearch import MovieServer, ServerConfig
    from moviesearch.lookup import StaticLookupClient, MovieRecord

    client = StaticLookupClient({"alien": MovieRecord(title="Alien")})
    MovieServer(ServerConfig(port=35000), client=client).run()

=============================================================================
PACKAGE LAYOUT
=============================================================================

    moviesearch/
    ├── __main__.py      CLI entry point
    ├── config.py        ServerConfig (dataclass, env, .env)
    ├── server.py        MovieServer, serve(), create_app()
    ├── core/            SocketServer, Connection
    ├── http/            request line, response, router, status codes
    ├── handlers/        MovieHandler, SearchFormHandler, HTML pages
    ├── lookup/          MovieRecord, OMDbClient, lookup errors
    └── middleware/      pipeline and access log

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig
from .server import MovieServer, create_app, serve

__all__ = ["MovieServer", "ServerConfig", "create_app", "serve", "__version__"]
