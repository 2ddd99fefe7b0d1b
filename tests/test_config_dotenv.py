from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lib_log_sentry import cli as cli_module
from lib_log_sentry import config as sentry_config
from lib_log_sentry.domain.levels import LogLevel


@pytest.fixture(autouse=True)
def _reset_dotenv_state() -> Iterator[None]:
    """Reset shared dotenv state around each test."""

    sentry_config._reset_dotenv_state_for_testing()
    yield
    sentry_config._reset_dotenv_state_for_testing()


def test_enable_dotenv_populates_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    nested = tmp_path / "nested"
    nested.mkdir()
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_SENTRY_TAGS=service=dotenv\n")
    monkeypatch.chdir(nested)

    loaded = sentry_config.enable_dotenv()

    try:
        assert loaded == env_file.resolve()
        assert sentry_config.loaded_dotenv() == loaded
        assert os.environ["LOG_SENTRY_TAGS"] == "service=dotenv"
        assert dict(sentry_config.settings_from_env().tags) == {"service": "dotenv"}
    finally:
        os.environ.pop("LOG_SENTRY_TAGS", None)


def test_enable_dotenv_respects_existing_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".env").write_text("SENTRY_DSN=https://key@o0.ingest.sentry.io/2\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SENTRY_DSN", "https://key@o0.ingest.sentry.io/1")

    assert sentry_config.enable_dotenv() is not None
    assert os.environ["SENTRY_DSN"] == "https://key@o0.ingest.sentry.io/1"


def test_enable_dotenv_with_missing_file_returns_none(tmp_path: Path) -> None:
    assert sentry_config.enable_dotenv(tmp_path / "absent.env") is None
    assert sentry_config.loaded_dotenv() is None


def test_settings_environment_wins_over_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENTRY_DSN", "https://key@o0.ingest.sentry.io/3")
    monkeypatch.setenv("LOG_SENTRY_LEVEL", "warning")
    monkeypatch.setenv("LOG_SENTRY_TIMEOUT", "0.75")
    monkeypatch.setenv("LOG_SENTRY_STACKTRACE", "on")

    settings = sentry_config.settings_from_env(dsn="https://key@o0.ingest.sentry.io/9", level="error", timeout=2.0)

    assert settings.dsn == "https://key@o0.ingest.sentry.io/3"
    assert settings.level is LogLevel.WARN
    assert settings.levels is None
    assert settings.timeout == 0.75
    assert settings.stacktrace_enabled is True


def test_settings_fall_back_to_arguments() -> None:
    settings = sentry_config.settings_from_env(dsn="", levels=["error", LogLevel.PANIC], tags={"service": "api"})

    assert settings.dsn is None
    assert settings.levels == (LogLevel.ERROR, LogLevel.PANIC)
    assert dict(settings.tags) == {"service": "api"}
    assert settings.asynchronous is False


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("LOG_SENTRY_FLUSH_TIMEOUT", "soon", "number of seconds"),
        ("LOG_SENTRY_TAGS", "service", "Invalid tag entry"),
        ("LOG_SENTRY_LEVELS", "error,loud", "Unknown log level"),
    ],
)
def test_settings_reject_malformed_environment(monkeypatch: pytest.MonkeyPatch, name: str, value: str, message: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=message):
        sentry_config.settings_from_env()


def test_cli_dotenv_toggle_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    runner = CliRunner()
    calls: list[tuple[object, ...]] = []

    def record_enable(*args: object) -> None:
        calls.append(args)

    monkeypatch.setattr(cli_module, "enable_dotenv", record_enable)

    result = runner.invoke(cli_module.cli, ["--dotenv", "info"])
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["info"], env={"LOG_SENTRY_DOTENV": "1"})
    assert result.exit_code == 0
    assert len(calls) == 1

    calls.clear()
    result = runner.invoke(cli_module.cli, ["--no-dotenv", "info"], env={"LOG_SENTRY_DOTENV": "1"})
    assert result.exit_code == 0
    assert calls == []
