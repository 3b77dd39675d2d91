"""
Socket Step (K-001)

Opens the user's live feed socket, sends one notification once connected and
disconnects on the first incoming feed item.
"""

from typing import Optional

from ..realtime import PushSocket, SocketSession, create_socket_connection
from ..runner import register_step
from .base import BaseStep
from .notification_steps import SendToSingleRecipient


@register_step
class SocketDemo(BaseStep):
    """K-001: Short-lived real-time feed subscription."""

    id = "K-001"
    name = "Push Notification - PushSDKSocket()"
    api_name = "PushSDKSocket"
    description = "Connects the feed socket and reacts to connect, feed and disconnect events"
    category = "socket"
    requires_channel = True
    reports_status = False

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.socket: Optional[PushSocket] = None
        self.session: Optional[SocketSession] = None

    async def send_trigger(self):
        """Silent single-recipient send, triggered by the connect event."""
        sender = SendToSingleRecipient(self.client, self.signers, self.config, self.presenter)
        return await sender.call(silent=True)

    async def execute(self):
        self.socket = create_socket_connection(
            self.signers.user_caip,
            env=self.config.env,
            socket_options={"auto_connect": False},
            chain_id=self.config.chain_id,
        )
        self.session = SocketSession(
            self.socket,
            on_connected=self.send_trigger,
            presenter=self.presenter,
            window=self.config.socket_window,
            silent=not self.config.show_api_response,
        )
        state = await self.session.run()
        return {
            "state": state.value,
            "transitions": [s.value for s in self.session.history],
        }

    async def call(self, silent: Optional[bool] = None):
        # The session dumps feed items itself; the summary dict is not shown
        return await super().call(silent=True)

    async def cleanup(self):
        if self.socket is not None:
            await self.socket.close()
