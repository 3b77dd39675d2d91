"""
Base Step Classes for the push demo.

A step is one demonstrated client call:
- announce the call
- await it
- print a status line, and the raw response unless silent
- let any failure propagate (a failed step ends the run)
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..clients import PushClient
    from ..config import DemoConfig
    from ..presenters import ConsolePresenter
    from ..signers import DemoSigners


class StepStatus(Enum):
    """Status of a step."""
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    """Result of one step execution."""
    id: str
    name: str
    category: str
    status: StepStatus
    duration_ms: float
    response: Any = None
    error: Optional[str] = None


class BaseStep(ABC):
    """
    Abstract base class for all demo steps.

    Class attributes:
        id: Unique step ID (e.g. "U-001")
        name: Line announced before the call
        api_name: Prefix of the status line
        category: "user", "channel", "payloads" or "socket"
        requires_channel: Skip the step when there is no channel signer
        status_code: Status reported in the status line
        reports_status: Whether call() prints a status line at all

    Example usage:
        @register_step
        class GetFeeds(BaseStep):
            id = "U-001"
            name = "PushAPI.user.getFeeds"
            api_name = "PushAPI.user.getFeeds"
            category = "user"

            async def execute(self):
                return await self.client.get_feeds(user=self.signers.user_caip)
    """

    id: str = ""
    name: str = ""
    api_name: str = ""
    description: str = ""
    category: str = "general"
    requires_channel: bool = False
    status_code: int = 200
    reports_status: bool = True

    def __init__(
        self,
        client: "PushClient",
        signers: "DemoSigners",
        config: "DemoConfig",
        presenter: "ConsolePresenter",
    ):
        self.client = client
        self.signers = signers
        self.config = config
        self.presenter = presenter

    @property
    def status_line(self) -> str:
        return f"{self.api_name} | Response - {self.status_code} OK"

    @abstractmethod
    async def execute(self) -> Any:
        """Perform the client call and return its raw result."""

    async def call(self, silent: Optional[bool] = None) -> Any:
        """
        Execute the call and report it, without the announcement line.

        Args:
            silent: Suppress the raw response dump. Defaults to
                `not config.show_api_response`.
        """
        if silent is None:
            silent = not self.config.show_api_response

        response = await self.execute()

        if self.reports_status:
            self.presenter.show_status(self.status_line)
        if not silent:
            self.presenter.show_api_response(response, title=self.api_name)
        return response

    async def run(self) -> StepResult:
        """Announce the step and call it. Exceptions propagate."""
        self.presenter.announce_step(self.name)
        start = time.time()

        try:
            response = await self.call()
        except Exception as e:
            self.presenter.show_error(f"{self.api_name} failed: {type(e).__name__}: {e}")
            raise

        return StepResult(
            id=self.id,
            name=self.name,
            category=self.category,
            status=StepStatus.PASSED,
            duration_ms=(time.time() - start) * 1000,
            response=response,
        )

    async def cleanup(self):
        """Release anything the step left open. Called once the run is over."""
        pass
