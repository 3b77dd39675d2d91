import io
from typing import Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from rich.console import Console

from push_demo.clients import PushClient
from push_demo.config import DemoConfig
from push_demo.presenters import ConsolePresenter
from push_demo.runner import load_steps
from push_demo.signers import DemoSigners

CHANNEL_PRIVATE_KEY = "0x" + "4c" * 32


@pytest.fixture(scope="session", autouse=True)
def registered_steps():
    load_steps()


@pytest.fixture
def signers():
    return DemoSigners.generate(channel_private_key=CHANNEL_PRIVATE_KEY)


@pytest.fixture
def user_only_signers():
    return DemoSigners.generate(channel_private_key=None)


@pytest.fixture
def config(tmp_path):
    return DemoConfig(
        wallet_private_key=CHANNEL_PRIVATE_KEY,
        socket_window=0,
        log_file_path=str(tmp_path / "push_demo.log"),
    )


@pytest.fixture
def verbose_config(config):
    return config.model_copy(update={"show_api_response": True})


@pytest.fixture
def presenter():
    return MagicMock(spec=ConsolePresenter)


@pytest.fixture
def recording_presenter():
    """Real presenter writing into a buffer; read it with .console.file.getvalue()."""
    console = Console(file=io.StringIO(), width=200, color_system=None)
    return ConsolePresenter(console=console)


@pytest.fixture
def fake_client():
    client = MagicMock(spec=PushClient)
    client.get_feeds.return_value = [{"title": "hello"}]
    client.get_subscriptions.return_value = []
    client.get_channel.return_value = {"name": "demo channel"}
    client.search_channels.return_value = [{"name": "push"}]
    client.subscribe.return_value = {"status": "success", "message": "successfully opted into channel"}
    client.unsubscribe.return_value = {"status": "success", "message": "successfully opted out of channel"}
    client.send_notification.return_value = {"status": 204, "data": None}
    client.get_subscribers.return_value = []
    client.close = AsyncMock()
    return client


class FakeSocket:
    """Stand-in for PushSocket: records handlers and calls, fires events on demand."""

    def __init__(self):
        self.handlers: Dict[str, Callable] = {}
        self.attach_order: List[str] = []
        self.connect_calls = 0
        self.disconnect_calls = 0
        self.close_calls = 0

    def on(self, event, handler):
        name = getattr(event, "value", event)
        self.handlers[name] = handler
        self.attach_order.append(name)

    def connect(self):
        self.connect_calls += 1

    async def disconnect(self):
        self.disconnect_calls += 1

    async def close(self):
        self.close_calls += 1

    async def fire(self, event, *args):
        return await self.handlers[event](*args)


@pytest.fixture
def fake_socket():
    return FakeSocket()


@pytest.fixture
def fake_socket_class():
    return FakeSocket
