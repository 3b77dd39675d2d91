"""Demo steps, one per demonstrated client call."""

from .base import BaseStep, StepResult, StepStatus

__all__ = ["BaseStep", "StepResult", "StepStatus"]
