"""CLI entrypoint for task-hooks."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO

import rich_click as click

from task_hooks import __version__
from task_hooks.config import Settings
from task_hooks.controllers import (
    DecodeCommand,
    HookCommand,
    NormalizeCommand,
    TaskHooksCliController,
)
from task_hooks.errors import TaskHookError
from task_hooks.logging_setup import setup_logging

click.rich_click.USE_MARKDOWN = True
CONTROLLER = TaskHooksCliController()


@click.group()
@click.version_option(version=__version__, prog_name="task-hooks")
def task_hooks() -> None:
    """Validate and rewrite Taskwarrior JSON."""

    try:
        settings = Settings.from_env()
        settings.validate()
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    setup_logging(settings.log_level)


@task_hooks.command("check")
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--lines", is_flag=True, help="Input holds one task object per line.")
def check(source: BinaryIO, lines: bool) -> None:
    """Decode tasks and report whether they are valid."""

    with _reported_errors():
        _emit_lines(CONTROLLER.check(DecodeCommand(payload=source.read(), lines=lines)))


@task_hooks.command("summary")
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--lines", is_flag=True, help="Input holds one task object per line.")
def summary(source: BinaryIO, lines: bool) -> None:
    """Count decoded tasks per status and list the UDAs seen."""

    with _reported_errors():
        _emit_lines(CONTROLLER.summary(DecodeCommand(payload=source.read(), lines=lines)))


@task_hooks.command("normalize")
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--lines", is_flag=True, help="Read and write one task object per line.")
@click.option("--one", is_flag=True, help="Read and write a single task object.")
def normalize(source: BinaryIO, lines: bool, one: bool) -> None:
    """Decode tasks and write them back in canonical form."""

    if lines and one:
        raise click.UsageError("--lines and --one are mutually exclusive.")
    command = NormalizeCommand(payload=source.read(), lines=lines, one=one)
    with _reported_errors():
        _emit_bytes(CONTROLLER.normalize(command))


@task_hooks.command("on-add")
def on_add() -> None:
    """Hook passthrough: validate the added task and echo it back."""

    stdin = click.get_binary_stream("stdin")
    with _reported_errors():
        _emit_bytes(CONTROLLER.on_add(HookCommand(payload=stdin.read())))


@task_hooks.command("on-modify")
def on_modify() -> None:
    """Hook passthrough: validate the modified task and echo it back."""

    stdin = click.get_binary_stream("stdin")
    with _reported_errors():
        _emit_bytes(CONTROLLER.on_modify(HookCommand(payload=stdin.read())))


@contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except TaskHookError as error:
        raise click.ClickException(str(error)) from error


def _emit_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


def _emit_bytes(payload: bytes) -> None:
    click.get_binary_stream("stdout").write(payload)
    if payload and not payload.endswith(b"\n"):
        click.get_binary_stream("stdout").write(b"\n")


if __name__ == "__main__":  # pragma: no cover
    task_hooks()
