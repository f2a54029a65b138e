"""
=============================================================================
CORE MODULE
=============================================================================

Socket-level building blocks:

- SocketServer: listening socket and the one-at-a-time accept loop
- Connection: one client socket with line reading and guaranteed close

=============================================================================
"""

from .socket_server import SocketServer, ServerStartError
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",
    "ServerStartError",
    "Connection",
    "ConnectionState",
]
