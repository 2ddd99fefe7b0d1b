"""Environment and ``.env`` configuration for the Sentry bridge.

Purpose
-------
Translate ``SENTRY_DSN`` and ``LOG_SENTRY_*`` environment variables into hook
options, optionally after loading the nearest ``.env`` file.

Contents
--------
* :func:`enable_dotenv` - load the nearest ``.env`` without overriding the
  environment.
* :class:`HookSettings` - resolved options.
* :func:`settings_from_env` - merge call arguments with environment overrides.
* Parsing helpers for booleans, floats, level lists and ``key=value`` tags.

Environment variables win over call arguments, matching the precedence of
:func:`lib_log_sentry.runtime.init`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence

from dotenv import find_dotenv, load_dotenv

from lib_log_sentry.domain.levels import LogLevel

_LOADED_DOTENV: Path | None = None


def enable_dotenv(path: str | Path | None = None) -> Path | None:
    """Load ``path`` or the nearest ``.env`` above the working directory.

    Existing environment variables keep precedence over file entries.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, ``None`` when no file was found.
    """

    global _LOADED_DOTENV
    if path is None:
        found = find_dotenv(usecwd=True)
        if not found:
            return None
        candidate = Path(found)
    else:
        candidate = Path(path)
        if not candidate.is_file():
            return None
    resolved = candidate.resolve()
    load_dotenv(resolved, override=False)
    _LOADED_DOTENV = resolved
    return resolved


def loaded_dotenv() -> Path | None:
    """Return the ``.env`` file loaded by :func:`enable_dotenv`, if any."""

    return _LOADED_DOTENV


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED_DOTENV
    _LOADED_DOTENV = None


@dataclass(slots=True, frozen=True)
class HookSettings:
    """Hook options resolved from arguments and environment."""

    dsn: str | None = None
    levels: tuple[LogLevel, ...] | None = None
    level: LogLevel | None = None
    timeout: float = 0.1
    flush_timeout: float = 3.0
    tags: Mapping[str, str] = field(default_factory=dict)
    stacktrace_enabled: bool = False
    asynchronous: bool = False


def settings_from_env(
    *,
    dsn: str | None = None,
    levels: Sequence[LogLevel | str] | None = None,
    level: LogLevel | str | None = None,
    timeout: float = 0.1,
    flush_timeout: float = 3.0,
    tags: Mapping[str, str] | None = None,
    stacktrace_enabled: bool = False,
    asynchronous: bool = False,
) -> HookSettings:
    """Return :class:`HookSettings` with environment overrides applied.

    Examples
    --------
    >>> import os
    >>> os.environ['LOG_SENTRY_LEVELS'] = 'error,fatal'
    >>> [lvl.name for lvl in settings_from_env().levels]
    ['ERROR', 'FATAL']
    >>> _ = os.environ.pop('LOG_SENTRY_LEVELS')
    """

    env_levels = os.getenv("LOG_SENTRY_LEVELS")
    resolved_levels = _parse_levels(env_levels) if env_levels else _coerce_levels(levels)
    env_level = os.getenv("LOG_SENTRY_LEVEL")
    resolved_level = _coerce_level(env_level if env_level else level)

    merged_tags = dict(tags or {})
    merged_tags.update(parse_tags(os.getenv("LOG_SENTRY_TAGS")))

    return HookSettings(
        dsn=os.getenv("SENTRY_DSN", dsn or "") or None,
        levels=resolved_levels,
        level=resolved_level,
        timeout=_env_float("LOG_SENTRY_TIMEOUT", timeout),
        flush_timeout=_env_float("LOG_SENTRY_FLUSH_TIMEOUT", flush_timeout),
        tags=merged_tags,
        stacktrace_enabled=_env_bool("LOG_SENTRY_STACKTRACE", stacktrace_enabled),
        asynchronous=_env_bool("LOG_SENTRY_ASYNC", asynchronous),
    )


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL')
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from exc


def _coerce_level(level: LogLevel | str | None) -> LogLevel | None:
    if level is None or isinstance(level, LogLevel):
        return level
    return LogLevel.from_name(level)


def _coerce_levels(levels: Sequence[LogLevel | str] | None) -> tuple[LogLevel, ...] | None:
    if levels is None:
        return None
    return tuple(_coerce_level(item) for item in levels)  # type: ignore[misc]


def _parse_levels(value: str) -> tuple[LogLevel, ...]:
    """Parse a comma separated level list such as ``"warn,error"``."""
    return tuple(LogLevel.from_name(part) for part in value.split(",") if part.strip())


def parse_tags(value: str | None) -> dict[str, str]:
    """Parse ``key=value`` pairs separated by commas.

    Examples
    --------
    >>> parse_tags('service=api, region = eu')
    {'service': 'api', 'region': 'eu'}
    >>> parse_tags(None)
    {}
    """
    if not value:
        return {}
    tags: dict[str, str] = {}
    for chunk in value.split(","):
        if not chunk.strip():
            continue
        key, sep, tag_value = chunk.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Invalid tag entry {chunk!r}; expected key=value")
        tags[key.strip()] = tag_value.strip()
    return tags


__all__ = ["HookSettings", "enable_dotenv", "loaded_dotenv", "parse_tags", "settings_from_env"]
