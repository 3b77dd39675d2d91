"""
Demo Runner - Orchestrates step execution.

Runs the fixed demo sequence strictly one step after another. Steps that
need the channel identity are skipped when no channel signer exists; any
failure ends the run.
"""

import importlib
import logging
from typing import Dict, List, Optional, Type

from .clients import PushClient
from .config import DemoConfig
from .exceptions import ConfigurationError
from .presenters import ConsolePresenter
from .signers import DemoSigners
from .steps.base import BaseStep, StepResult, StepStatus

logger = logging.getLogger(__name__)

STEP_MODULES = (
    "push_demo.steps.user_steps",
    "push_demo.steps.channel_steps",
    "push_demo.steps.notification_steps",
    "push_demo.steps.socket_steps",
)

DEMO_SEQUENCE = [
    # User identity only
    "U-001",  # getFeeds
    "U-002",  # getFeeds [Spam]
    "U-003",  # getSubscriptions
    # Channel identity required
    "C-001",  # getChannel
    "C-002",  # search
    "C-003",  # subscribe
    "C-004",  # unsubscribe
    "P-001",  # sendNotification, single recipient
    "P-002",  # sendNotification, subset
    "P-003",  # sendNotification, broadcast
    "C-005",  # _getSubscribers
    "K-001",  # socket
]


class StepRegistry:
    """Registry of all available steps."""

    _steps: Dict[str, Type[BaseStep]] = {}
    _by_category: Dict[str, List[Type[BaseStep]]] = {}

    @classmethod
    def register(cls, step_class: Type[BaseStep]):
        """Register a step class."""
        step_id = step_class.id
        category = step_class.category

        if step_id in cls._steps:
            return

        cls._steps[step_id] = step_class
        cls._by_category.setdefault(category, []).append(step_class)

    @classmethod
    def get(cls, step_id: str) -> Optional[Type[BaseStep]]:
        return cls._steps.get(step_id)

    @classmethod
    def get_by_category(cls, category: str) -> List[Type[BaseStep]]:
        """Steps of a category, in demo order."""
        return [s for s in cls.in_sequence() if s.category == category]

    @classmethod
    def get_categories(cls) -> List[str]:
        return list(cls._by_category.keys())

    @classmethod
    def in_sequence(cls) -> List[Type[BaseStep]]:
        """Registered steps in DEMO_SEQUENCE order."""
        return [cls._steps[step_id] for step_id in DEMO_SEQUENCE if step_id in cls._steps]

    @classmethod
    def list_all(cls) -> List[Dict]:
        """List all steps with metadata, in demo order."""
        return [
            {
                "id": s.id,
                "name": s.name,
                "category": s.category,
                "description": s.description,
                "requires_channel": s.requires_channel,
            }
            for s in cls.in_sequence()
        ]


def register_step(cls: Type[BaseStep]) -> Type[BaseStep]:
    """Decorator to register a step class."""
    StepRegistry.register(cls)
    return cls


def load_steps():
    """Import all step modules to populate the registry."""
    for module in STEP_MODULES:
        importlib.import_module(module)


class DemoRunner:
    """
    Main demo runner.

    Features:
    - Identity derivation (channel, user, dummy)
    - Channel step gating on the channel signer
    - Strictly sequential execution, fatal on the first failure
    - Result aggregation and reporting
    """

    def __init__(
        self,
        config: Optional[DemoConfig] = None,
        client: Optional[PushClient] = None,
        signers: Optional[DemoSigners] = None,
        presenter: Optional[ConsolePresenter] = None,
    ):
        self.config = config or DemoConfig()
        self.client = client or PushClient(
            env=self.config.env,
            chain_id=self.config.chain_id,
            timeout=self.config.request_timeout,
        )
        self.signers = signers
        self.presenter = presenter or ConsolePresenter()

        self._results: List[StepResult] = []
        self._executed: List[BaseStep] = []
        load_steps()

    async def setup(self) -> bool:
        """
        Derive the demo identities.

        Returns:
            True if setup succeeded

        Raises:
            ConfigurationError: if WALLET_PRIVATE_KEY is not a usable key
        """
        self.presenter.announce_phase(0, "Demo Setup")

        if self.signers is None:
            try:
                self.signers = DemoSigners.generate(
                    channel_private_key=self.config.wallet_private_key,
                    chain_id=self.config.chain_id,
                )
            except ValueError:
                raise ConfigurationError("WALLET_PRIVATE_KEY is not a valid private key")

        rows = [("user", self.signers.user_caip), ("dummy", self.signers.dummy_caip)]
        if self.signers.has_channel:
            rows.insert(0, ("channel", self.signers.channel_caip))
        else:
            logger.info("No channel signer, channel steps will be skipped")

        self.presenter.show_info(f"Environment: {self.config.env.value}")
        self.presenter.show_identities(rows)
        return True

    def should_run(self, step_class: Type[BaseStep]) -> bool:
        return not step_class.requires_channel or self.signers.has_channel

    async def run_step(self, step_class: Type[BaseStep]) -> StepResult:
        """
        Run a single step.

        Channel steps without a channel signer are recorded as SKIPPED and
        print nothing. A failing step is recorded as FAILED and re-raised.
        """
        if self.signers is None:
            await self.setup()

        if not self.should_run(step_class):
            logger.info(f"Skipping {step_class.id} ({step_class.name}): no channel signer")
            result = StepResult(
                id=step_class.id,
                name=step_class.name,
                category=step_class.category,
                status=StepStatus.SKIPPED,
                duration_ms=0,
            )
            self._results.append(result)
            return result

        step = step_class(
            client=self.client,
            signers=self.signers,
            config=self.config,
            presenter=self.presenter,
        )
        self._executed.append(step)

        try:
            result = await step.run()
        except Exception as e:
            logger.error(f"Step {step.id} failed: {type(e).__name__}: {e}")
            self._results.append(StepResult(
                id=step.id,
                name=step.name,
                category=step.category,
                status=StepStatus.FAILED,
                duration_ms=0,
                error=f"{type(e).__name__}: {e}",
            ))
            raise

        self._results.append(result)
        return result

    async def run_by_id(self, step_id: str) -> Optional[StepResult]:
        """
        Run a step by its ID.

        Returns:
            StepResult or None if the step is not found
        """
        step_class = StepRegistry.get(step_id)
        if not step_class:
            self.presenter.show_error(f"Step '{step_id}' not found")
            return None
        return await self.run_step(step_class)

    async def run_category(self, category: str) -> List[StepResult]:
        """Run all steps of a category, in demo order."""
        steps = StepRegistry.get_by_category(category)
        if not steps:
            self.presenter.show_warning(f"No steps found in category '{category}'")
            return []

        return [await self.run_step(step_class) for step_class in steps]

    async def run_all(self) -> List[StepResult]:
        """Run the whole demo sequence."""
        self.presenter.announce_phase(1, "Push Notification Use Cases")
        results = []
        for step_class in StepRegistry.in_sequence():
            results.append(await self.run_step(step_class))
        return results

    def get_results(self) -> List[StepResult]:
        return self._results

    def get_summary(self) -> Dict:
        """Get summary statistics from results."""
        passed = sum(1 for r in self._results if r.status == StepStatus.PASSED)
        failed = sum(1 for r in self._results if r.status == StepStatus.FAILED)
        skipped = sum(1 for r in self._results if r.status == StepStatus.SKIPPED)

        return {
            "total": len(self._results),
            "passed": passed,
            "failed": failed,
            "skipped": skipped,
            "duration_ms": sum(r.duration_ms for r in self._results),
            "executed": [r.id for r in self._results if r.status != StepStatus.SKIPPED],
        }

    def show_summary(self):
        self.presenter.show_demo_summary(self._results)

    async def cleanup(self):
        """Close sockets left open by steps, then the HTTP client."""
        for step in self._executed:
            await step.cleanup()
        await self.client.close()


async def run_demo(
    step_id: Optional[str] = None,
    category: Optional[str] = None,
    config: Optional[DemoConfig] = None,
    presenter: Optional[ConsolePresenter] = None,
) -> List[StepResult]:
    """
    Convenience function to run the demo.

    Args:
        step_id: Run one step by ID
        category: Run all steps of a category
        config: Demo configuration
        presenter: Output presenter

    Returns:
        List of StepResults
    """
    runner = DemoRunner(config=config, presenter=presenter)

    try:
        if not await runner.setup():
            return []

        if step_id:
            result = await runner.run_by_id(step_id)
            results = [result] if result else []
        elif category:
            results = await runner.run_category(category)
        else:
            results = await runner.run_all()

        runner.show_summary()
        return results

    finally:
        await runner.cleanup()
