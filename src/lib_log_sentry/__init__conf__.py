"""Static package metadata surfaced by the CLI and ``summary_info``."""

from __future__ import annotations

name = "lib_log_sentry"
title = "Forward stdlib log records to Sentry through a configurable hook"
version = "0.1.0"
shell_command = "lib_log_sentry"


def summary_info() -> str:
    """Return the metadata banner printed by ``lib_log_sentry info``.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_log_sentry:'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    return "\n".join(lines) + "\n"
