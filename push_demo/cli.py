"""
CLI Entry Point for the push demo.
"""

import asyncio
from typing import Optional

import click
import httpx

from . import __version__
from .config import DemoConfig, Env
from .exceptions import PushDemoError
from .logging_config import setup_logging
from .runner import StepRegistry, load_steps, run_demo


@click.group()
@click.version_option(version=__version__)
def cli():
    """Push Notification Demo - walks through the notification client calls."""
    load_steps()


@cli.command()
@click.option(
    "--env", "-e",
    type=click.Choice([e.value for e in Env]),
    default=None,
    help="Backend environment (default: PUSH_ENV or staging)",
)
@click.option(
    "--show-response/--hide-response",
    default=None,
    help="Print raw API responses (default: SHOW_API_RESPONSE)",
)
@click.option(
    "--window",
    type=click.FloatRange(min=0),
    default=None,
    help="Seconds the socket demo stays open (default: SOCKET_DEMO_WINDOW or 4)",
)
@click.option(
    "--step", "-s",
    type=str,
    default=None,
    help="Run a single step by ID (e.g., U-001)",
)
@click.option(
    "--category", "-c",
    type=click.Choice(["user", "channel", "payloads", "socket", "all"]),
    default=None,
    help="Run all steps in category",
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read variables from this .env file",
)
def run(
    env: Optional[str],
    show_response: Optional[bool],
    window: Optional[float],
    step: Optional[str],
    category: Optional[str],
    env_file: Optional[str],
):
    """Run the demo steps."""
    overrides = {}
    if env is not None:
        overrides["env"] = Env(env)
    if show_response is not None:
        overrides["show_api_response"] = show_response
    if window is not None:
        overrides["socket_window"] = window

    if category == "all":
        category = None

    try:
        config = DemoConfig.load_from_env(env_file=env_file)
        if overrides:
            config = config.model_copy(update=overrides)
        setup_logging(config)
        asyncio.run(run_demo(step_id=step, category=category, config=config))
    except (PushDemoError, httpx.HTTPError) as e:
        raise click.ClickException(f"{type(e).__name__}: {e}")


@cli.command("list")
@click.option(
    "--category", "-c",
    type=str,
    default=None,
    help="Filter by category",
)
def list_steps(category: Optional[str]):
    """List all steps in demo order."""
    steps = StepRegistry.list_all()

    if category:
        steps = [s for s in steps if s["category"] == category]

    if not steps:
        click.echo("No steps found.")
        return

    for s in steps:
        marker = " [channel]" if s["requires_channel"] else ""
        click.echo(f"  {s['id']}: {s['name']}{marker}")


@cli.command()
def categories():
    """List all step categories."""
    cats = StepRegistry.get_categories()
    if not cats:
        click.echo("No categories found. Steps may not be loaded.")
        return

    click.echo("Available categories:")
    for cat in sorted(cats):
        count = len(StepRegistry.get_by_category(cat))
        click.echo(f"  {cat}: {count} steps")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
