"""
Real-time notification socket.

The push backend speaks Socket.IO; a connection is keyed by the user's CAIP
address passed as the `address` query parameter.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

import socketio

from ..config import DEFAULT_CHAIN_ID, Env, socket_url
from ..exceptions import PushValidationError
from ..signers import validated_caip

logger = logging.getLogger(__name__)


class SocketEvent(str, Enum):
    CONNECT = "connect"
    DISCONNECT = "disconnect"
    USER_FEEDS = "userFeeds"
    USER_SPAM_FEEDS = "userSpamFeeds"


DEFAULT_SOCKET_OPTIONS: Dict[str, Any] = {
    "auto_connect": False,
    "reconnection": True,
    "reconnection_attempts": 5,
    "wait_timeout": 10,
}


class PushSocket:
    """Socket.IO connection for one user's live feed."""

    def __init__(
        self,
        url: str,
        user: str,
        reconnection: bool = True,
        reconnection_attempts: int = 5,
        wait_timeout: float = 10,
        client: Optional[socketio.AsyncClient] = None,
    ):
        self.url = url
        self.user = user
        self.wait_timeout = wait_timeout
        self._client = client or socketio.AsyncClient(
            reconnection=reconnection,
            reconnection_attempts=reconnection_attempts,
        )
        self._connect_task: Optional[asyncio.Task] = None

    @property
    def endpoint(self) -> str:
        return f"{self.url}?address={quote(self.user, safe='')}"

    @property
    def connected(self) -> bool:
        return self._client.connected

    def on(self, event: str, handler: Callable):
        """Attach a handler for a socket event."""
        name = event.value if isinstance(event, SocketEvent) else event
        self._client.on(name, handler)

    def connect(self) -> asyncio.Task:
        """
        Issue the connection without waiting for it.

        Progress is reported through the connect/disconnect events. A failed
        attempt is logged, it does not raise into the caller.
        """
        if self._connect_task is None or self._connect_task.done():
            logger.info(f"Connecting socket for {self.user}")
            self._connect_task = asyncio.ensure_future(self._connect())
            self._connect_task.add_done_callback(self._on_connect_done)
        return self._connect_task

    async def _connect(self):
        await self._client.connect(
            self.endpoint,
            transports=["websocket"],
            wait_timeout=self.wait_timeout,
        )

    def _on_connect_done(self, task: asyncio.Task):
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Socket connection for {self.user} failed: {error}")

    async def disconnect(self):
        await self._client.disconnect()

    async def close(self):
        """Cancel a pending connection attempt and drop the connection."""
        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()
        if self.connected:
            await self.disconnect()


def create_socket_connection(
    user: str,
    env: Env = Env.STAGING,
    socket_options: Optional[Dict[str, Any]] = None,
    chain_id: int = DEFAULT_CHAIN_ID,
) -> Optional[PushSocket]:
    """
    Create a socket for `user`.

    Returns None when no socket can be built for the given user. With
    socket_options["auto_connect"] the connection is issued right away, which
    needs a running event loop.
    """
    options = {**DEFAULT_SOCKET_OPTIONS, **(socket_options or {})}
    try:
        user_caip = validated_caip(user, chain_id)
    except PushValidationError as e:
        logger.error(f"Socket not created: {e}")
        return None

    push_socket = PushSocket(
        socket_url(env),
        user_caip,
        reconnection=options["reconnection"],
        reconnection_attempts=options["reconnection_attempts"],
        wait_timeout=options["wait_timeout"],
    )
    if options["auto_connect"]:
        push_socket.connect()
    return push_socket
