"""
Socket demonstration session.

State machine:
    DISCONNECTED --connect()--> CONNECTING --connect event--> CONNECTED
    CONNECTED --feed event--> DISCONNECTING (disconnect() issued)
    CONNECTED / DISCONNECTING --disconnect event--> DISCONNECTED

The session waits a fixed window after issuing connect() and then returns,
whatever state the socket reached.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, List, Optional, TYPE_CHECKING

from ..exceptions import SocketConnectionError
from .connection import PushSocket, SocketEvent

if TYPE_CHECKING:
    from ..presenters import ConsolePresenter

logger = logging.getLogger(__name__)


class SocketState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTING = "disconnecting"


class SocketSession:
    def __init__(
        self,
        socket: Optional[PushSocket],
        on_connected: Callable[[], Awaitable[Any]],
        presenter: "ConsolePresenter",
        window: float = 4.0,
        silent: bool = True,
    ):
        if socket is None:
            raise SocketConnectionError()

        self.socket = socket
        self.on_connected = on_connected
        self.presenter = presenter
        self.window = window
        self.silent = silent

        self.state = SocketState.DISCONNECTED
        self.history: List[SocketState] = [self.state]
        self.connect_count = 0
        self.feed_count = 0
        # Handlers run as socket.io background tasks; a failure is kept here
        # and re-raised by run()
        self.error: Optional[Exception] = None

    def _transition(self, new_state: SocketState):
        logger.debug(f"Socket {self.state.value} -> {new_state.value}")
        self.state = new_state
        self.history.append(new_state)

    async def _handle_connect(self):
        if self.connect_count:
            logger.debug("Ignoring repeated connect event")
            return
        self.connect_count += 1
        self._transition(SocketState.CONNECTED)
        self.presenter.show_socket_event(
            f"Socket Connected - will disconnect after {self.window:g} seconds"
        )
        # Send one notification so a feed event shows up
        try:
            await self.on_connected()
        except Exception as e:
            logger.error(f"Send after socket connect failed: {type(e).__name__}: {e}")
            self.error = self.error or e

    async def _handle_feed(self, feed_item: Any = None):
        if self.feed_count or self.state != SocketState.CONNECTED:
            logger.debug(f"Ignoring feed event in state {self.state.value}")
            return
        self.feed_count += 1
        self.presenter.show_socket_event("Incoming Feed from Socket")
        if not self.silent:
            self.presenter.show_api_response(feed_item, title="Feed Item")

        self._transition(SocketState.DISCONNECTING)
        try:
            await self.socket.disconnect()
        except Exception as e:
            logger.error(f"Socket disconnect failed: {type(e).__name__}: {e}")
            self.error = self.error or e

    async def _handle_disconnect(self, *args):
        if self.state not in (SocketState.CONNECTED, SocketState.DISCONNECTING):
            logger.debug(f"Ignoring disconnect event in state {self.state.value}")
            return
        self._transition(SocketState.DISCONNECTED)
        self.presenter.show_socket_event("Socket Disconnected")

    async def run(self) -> SocketState:
        """Attach handlers, issue connect() and wait out the demo window."""
        self.socket.on(SocketEvent.CONNECT, self._handle_connect)
        self.socket.on(SocketEvent.DISCONNECT, self._handle_disconnect)
        self.socket.on(SocketEvent.USER_FEEDS, self._handle_feed)

        self._transition(SocketState.CONNECTING)
        self.socket.connect()

        await asyncio.sleep(self.window)
        logger.info(f"Socket demo window over, state={self.state.value}")
        if self.error is not None:
            raise self.error
        return self.state
