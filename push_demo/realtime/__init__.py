"""Real-time socket support for the push demo."""

from .connection import PushSocket, SocketEvent, create_socket_connection
from .session import SocketSession, SocketState

__all__ = ["PushSocket", "SocketEvent", "create_socket_connection", "SocketSession", "SocketState"]
