"""
Console Presenter for demo output.

Uses Rich for terminal output: step announcements, status lines,
raw response dumps and the run summary.
"""

import json
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..steps.base import StepResult, StepStatus


class ConsolePresenter:
    """
    Rich terminal output presenter for demo runs.

    Features:
    - Phase banners and step announcements
    - One status line per finished step
    - Raw response panels (only when asked for)
    - Socket event lines
    - Summary panel
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the presenter.

        Args:
            console: Rich console to write to (stdout by default)
        """
        self.console = console or Console()

    def _print(self, *args, **kwargs):
        self.console.print(*args, **kwargs)

    # -------------------------------------------------------------------------
    # Run Lifecycle
    # -------------------------------------------------------------------------

    def announce_phase(self, phase_num: int, name: str):
        """Announce a demo phase."""
        self._print()
        self.console.print(Panel(
            f"[bold white]{escape(name)}[/]",
            title=f"[bold magenta]PHASE {phase_num}[/]",
            border_style="magenta",
            padding=(0, 2),
        ))
        self._print()

    def announce_step(self, name: str):
        self._print(f"\n[bold yellow]{escape(name)}[/]", highlight=False)

    def show_status(self, line: str):
        """Status line printed once a call resolved."""
        self._print(f"[green]{escape(line)}[/]", highlight=False)

    # -------------------------------------------------------------------------
    # Data Display
    # -------------------------------------------------------------------------

    def show_api_response(self, response: Any, title: str = "API Response"):
        """Show a raw response in a panel."""
        formatted = json.dumps(response, indent=2, default=str)
        self.console.print(Panel(
            Text(formatted),
            title=escape(title),
            border_style="dim",
        ))

    def show_identities(self, rows: List[tuple]):
        """Show the run's identities as (role, address) rows."""
        table = Table(title="Identities", show_header=True)
        table.add_column("Role", style="cyan")
        table.add_column("Address")
        for role, address in rows:
            table.add_row(role, address)
        self.console.print(table)

    def show_socket_event(self, message: str):
        self._print(f"[cyan]{escape(message)}[/]", highlight=False)

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def show_success(self, message: str):
        """Show success message."""
        self._print(f"[green]  {escape(message)}[/]")

    def show_error(self, message: str):
        """Show error message."""
        self._print(f"[red]  {escape(message)}[/]")

    def show_warning(self, message: str):
        """Show warning message."""
        self._print(f"[yellow]  {escape(message)}[/]")

    def show_info(self, message: str):
        """Show info message."""
        self._print(f"[blue]  {escape(message)}[/]")

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def show_demo_summary(self, results: List[StepResult]):
        """Show summary of all step results."""
        passed = sum(1 for r in results if r.status == StepStatus.PASSED)
        failed = sum(1 for r in results if r.status == StepStatus.FAILED)
        skipped = sum(1 for r in results if r.status == StepStatus.SKIPPED)
        total_time = sum(r.duration_ms for r in results)

        summary = f"[green] Passed: {passed}[/]\n"
        summary += f"[red] Failed: {failed}[/]\n"
        if skipped:
            summary += f"[yellow] Skipped: {skipped}[/]\n"
        summary += f"\n[dim]Total time: {total_time/1000:.1f}s[/]"

        self._print()
        self.console.print(Panel(
            summary,
            title="[bold]Demo Summary[/]",
            border_style="green" if failed == 0 else "red",
            padding=(1, 2),
        ))

        if failed > 0:
            self._print("\n[bold red]Failed Steps:[/]")
            for r in results:
                if r.status == StepStatus.FAILED:
                    self._print(f"  - {r.id}: {escape(r.name)}")
                    if r.error:
                        self._print(f"    [dim]{escape(r.error[:200])}[/]")
