"""
Push Notification Demo
======================

Walks through the push notification client calls: feeds, subscriptions,
channel lookup and search, opt-in/opt-out, the three notification sends,
the subscriber list and a live feed socket.

Usage:
    python -m push_demo run
    python -m push_demo run --step U-001
    python -m push_demo run --category payloads --show-response
    python -m push_demo list
"""

__version__ = "1.0.0"

from .config import DemoConfig, Env
from .runner import DemoRunner, run_demo
from .steps.base import BaseStep, StepResult, StepStatus

__all__ = ["DemoConfig", "Env", "DemoRunner", "run_demo", "BaseStep", "StepResult", "StepStatus"]
