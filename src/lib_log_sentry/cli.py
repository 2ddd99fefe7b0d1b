"""Click command group for inspecting and exercising the Sentry hook.

Purpose
-------
Give operators a quick way to verify a DSN and hook settings from a shell:
``lib_log_sentry send "boom" --level error`` submits one event, ``--dry-run``
renders it with Rich instead of sending it.

Contents
--------
* :func:`cli` - root group with ``--traceback`` and ``--dotenv`` toggles.
* :func:`cli_info` - metadata banner.
* :func:`cli_send` - build and fire a single entry.
* :func:`main` - test-friendly runner returning an exit code.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from .adapters.console import RichConsoleTransport
from .adapters.sentry_transport import SentryTransport
from .application.ports.transport import TransportPort
from .config import enable_dotenv, parse_tags, settings_from_env
from .domain.configuration import StackTraceConfiguration
from .domain.entry import Caller, LogEntry
from .domain.levels import LogLevel
from .hook import SentryHook

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_LEVEL_CHOICES = [level.name.lower() for level in LogLevel]


def _dotenv_default() -> bool:
    return os.getenv("LOG_SENTRY_DOTENV", "").strip().lower() in {"1", "true", "yes", "on"}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--dotenv/--no-dotenv",
    default=None,
    help="Load the nearest .env before reading LOG_SENTRY_* variables (default: $LOG_SENTRY_DOTENV).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, dotenv: bool | None) -> None:
    """Forward log records to Sentry; run without a command to print package info."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    use_dotenv = _dotenv_default() if dotenv is None else dotenv
    ctx.ensure_object(dict)
    ctx.obj["dotenv_path"] = enable_dotenv() if use_dotenv else None
    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("message")
@click.option("--level", type=click.Choice(_LEVEL_CHOICES, case_sensitive=False), default="error", show_default=True)
@click.option("--dsn", envvar="SENTRY_DSN", default=None, help="Sentry DSN (default: $SENTRY_DSN).")
@click.option("--tag", "tags", multiple=True, help="Tag as key=value; may be repeated.")
@click.option("--stacktrace/--no-stacktrace", default=False, help="Attach a stack trace of this command.")
@click.option("--flush-timeout", type=float, default=3.0, show_default=True, help="Seconds to wait for delivery.")
@click.option("--dry-run", is_flag=True, help="Render the event on the console instead of sending it.")
@click.option("--no-color", is_flag=True, help="Disable colours for --dry-run output.")
def cli_send(
    message: str,
    level: str,
    dsn: str | None,
    tags: tuple[str, ...],
    stacktrace: bool,
    flush_timeout: float,
    dry_run: bool,
    no_color: bool,
) -> None:
    """Send MESSAGE as a single event at LEVEL."""

    parsed_tags: dict[str, str] = {}
    for raw in tags:
        try:
            parsed_tags.update(parse_tags(raw))
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--tag") from exc

    settings = settings_from_env(dsn=dsn, tags=parsed_tags, flush_timeout=flush_timeout, stacktrace_enabled=stacktrace)
    transport: TransportPort
    if dry_run:
        transport = RichConsoleTransport(no_color=no_color)
    else:
        if settings.dsn is None:
            raise click.UsageError("A DSN is required; pass --dsn, set SENTRY_DSN or use --dry-run.")
        transport = SentryTransport.from_dsn(settings.dsn, timeout=settings.timeout)

    entry_level = LogLevel.from_name(level)
    hook = SentryHook(
        transport,
        timeout=settings.timeout,
        flush_timeout=settings.flush_timeout,
        levels=list(LogLevel),
        tags=settings.tags,
        stacktrace=StackTraceConfiguration(enable=settings.stacktrace_enabled, level=LogLevel.TRACE, skip=0),
    )
    entry = LogEntry(
        timestamp=datetime.now(timezone.utc),
        level=entry_level,
        message=message,
        caller=Caller(file=__file__, line=0, function="cli_send"),
        data={"source": __init__conf__.shell_command},
    )
    hook.fire(entry)
    hook.close()
    if not dry_run:
        click.echo(f"Sent {entry_level.severity} event: {message}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group and return its exit code.

    Examples
    --------
    >>> main(["--version"])  # doctest: +ELLIPSIS
    0...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except Exception as exc:  # noqa: BLE001
        lib_cli_exit_tools.print_exception_message(trace_back=lib_cli_exit_tools.config.traceback)
        return lib_cli_exit_tools.get_system_exit_code(exc)
    return 0


__all__ = ["cli", "cli_info", "cli_send", "main"]
