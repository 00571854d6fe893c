"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import NimbusDumpConfig
from core.errors import NimbusDumpConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should default to six tables and warning logs."""
    monkeypatch.delenv("NIMBUS_DUMP_MAX_TABLES", raising=False)
    monkeypatch.delenv("NIMBUS_DUMP_LOG_LEVEL", raising=False)

    config = NimbusDumpConfig.from_env()

    assert (config.max_tables, config.log_level) == (6, "warning")


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should read table capacity and log level from environment."""
    monkeypatch.setenv("NIMBUS_DUMP_MAX_TABLES", "8")
    monkeypatch.setenv("NIMBUS_DUMP_LOG_LEVEL", "DEBUG")

    config = NimbusDumpConfig.from_env()

    assert (config.max_tables, config.log_level) == (8, "debug")


def test_from_env_raises_for_invalid_max_tables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric table capacity."""
    monkeypatch.setenv("NIMBUS_DUMP_MAX_TABLES", "many")

    with pytest.raises(NimbusDumpConfigError, match="NIMBUS_DUMP_MAX_TABLES"):
        NimbusDumpConfig.from_env()


def test_from_env_raises_for_too_few_tables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject capacity below the four inspected tables."""
    monkeypatch.setenv("NIMBUS_DUMP_MAX_TABLES", "3")

    with pytest.raises(NimbusDumpConfigError):
        NimbusDumpConfig.from_env()


def test_from_env_raises_for_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject log levels outside the supported set."""
    monkeypatch.setenv("NIMBUS_DUMP_LOG_LEVEL", "verbose")

    with pytest.raises(NimbusDumpConfigError, match="NIMBUS_DUMP_LOG_LEVEL"):
        NimbusDumpConfig.from_env()
