# src/taskcli/cli/main.py

"""
CLI entrypoint.

Resolves settings, initializes logging, then maps one sub-command onto one
Command and prints its result. Any TaskError becomes "Error: ..." on stderr
with exit status 1.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .. import __version__
from ..config import APP_NAME, get_settings
from ..logging_setup import setup_logging
from ..tasks.task_errors import TaskError
from ..tasks.task_store import TaskStore
from .commands import AddCommand, Command, DoneCommand, ListCommand, RemoveCommand, run_command

logger = logging.getLogger(__name__)

TASK_ID = click.IntRange(min=0)


def _dispatch(ctx: click.Context, command: Command) -> None:
    store: TaskStore = ctx.obj
    try:
        message = run_command(command, store)
    except TaskError as exc:
        logger.debug("%s failed", type(command).__name__, exc_info=True)
        raise click.ClickException(str(exc)) from exc
    click.echo(message)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--data-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Tasks file to use (overrides TASKCLI_DATA_FILE / TASKCLI_DATA_DIR).",
)
@click.version_option(__version__, prog_name=APP_NAME)
@click.pass_context
def cli(ctx: click.Context, data_file: Path | None) -> None:
    """Track short text tasks in a local JSON file."""
    settings = get_settings()
    try:
        setup_logging(console_level=settings.console_log_level, log_file=settings.log_file)
    except OSError as exc:
        raise click.ClickException(
            f"Cannot open log file {settings.log_file} ({exc.strerror or exc})"
        ) from exc

    path = data_file.expanduser() if data_file is not None else settings.data_file
    logger.debug("Using tasks file %s", path)
    ctx.obj = TaskStore(path)


@cli.command()
@click.argument("description", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, description: tuple[str, ...]) -> None:
    """Add a new task."""
    _dispatch(ctx, AddCommand(" ".join(description)))


@cli.command(name="list")
@click.option("-a", "--all", "include_completed", is_flag=True, help="Include completed tasks.")
@click.pass_context
def list_cmd(ctx: click.Context, include_completed: bool) -> None:
    """List tasks (use --all to include completed)."""
    _dispatch(ctx, ListCommand(include_completed))


@cli.command()
@click.argument("task_id", metavar="ID", type=TASK_ID)
@click.pass_context
def done(ctx: click.Context, task_id: int) -> None:
    """Mark a task as completed."""
    _dispatch(ctx, DoneCommand(task_id))


@cli.command()
@click.argument("task_id", metavar="ID", type=TASK_ID)
@click.pass_context
def remove(ctx: click.Context, task_id: int) -> None:
    """Remove a task."""
    _dispatch(ctx, RemoveCommand(task_id))


def main() -> None:
    cli(prog_name=APP_NAME)


if __name__ == "__main__":
    main()
