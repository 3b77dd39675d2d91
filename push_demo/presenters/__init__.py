"""Presenters for demo output."""

from .console_presenter import ConsolePresenter

__all__ = ["ConsolePresenter"]
