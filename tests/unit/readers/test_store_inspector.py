"""Unit tests for per-table store inspection."""

from __future__ import annotations

import pytest
import structlog

from core.config import NimbusDumpConfig
from core.errors import StoreTableError, TableDecodeError
from core.types import ParticipationSettings
from readers.store_inspector import StoreInspector, inspect_store
from tests.store_fakes import (
    FakeEnvironment,
    encode_json,
    scenario_tables,
    write_safe_mode_store,
)


def test_inspector_reads_all_four_tables() -> None:
    """Inspector should decode every table of a valid store."""
    inspector = StoreInspector(FakeEnvironment(scenario_tables()))

    results = (
        inspector.metadata(),
        len(inspector.enrollments()),
        len(inspector.experiments()),
        inspector.updates(),
    )

    assert results == (ParticipationSettings(3, True, False), 1, 1, [])


def test_inspector_holds_one_read_view_at_a_time() -> None:
    """Each table is drained in its own view, released before the next."""
    environment = FakeEnvironment(scenario_tables())
    inspector = StoreInspector(environment)

    inspector.metadata()
    inspector.enrollments()
    inspector.experiments()
    inspector.updates()

    assert (environment.max_open_views, environment.views_released) == (1, 4)


def test_inspector_releases_view_when_decoding_fails() -> None:
    """A failed drain should still release its read view."""
    tables = scenario_tables()
    tables["enrollments"][b"exp-2"] = encode_json({"slug": "exp-2"})
    environment = FakeEnvironment(tables)

    with pytest.raises(TableDecodeError):
        StoreInspector(environment).enrollments()

    assert environment.open_views == 0


def test_inspector_surfaces_missing_table() -> None:
    """A missing table is a store error, distinct from an empty one."""
    tables = scenario_tables()
    del tables["updates"]

    with pytest.raises(StoreTableError):
        StoreInspector(FakeEnvironment(tables)).updates()


def test_inspector_context_closes_environment() -> None:
    """Leaving the context should close the environment."""
    environment = FakeEnvironment(scenario_tables())

    with StoreInspector(environment):
        pass

    assert environment.closed


def test_inspect_store_routes_logs_to_stderr_when_unconfigured(tmp_path, capsys) -> None:
    """Library callers without a logging setup should get events on stderr."""
    write_safe_mode_store(tmp_path, scenario_tables())
    structlog.reset_defaults()

    with inspect_store(tmp_path, NimbusDumpConfig(log_level="info")) as inspector:
        inspector.metadata()

    captured = capsys.readouterr()
    assert structlog.is_configured()
    assert captured.out == ""
    assert '"event": "store_opened"' in captured.err


def test_inspect_store_keeps_existing_logging_configuration(tmp_path, capsys) -> None:
    """An application's own structlog setup should not be replaced."""
    write_safe_mode_store(tmp_path, scenario_tables())

    with inspect_store(tmp_path, NimbusDumpConfig(log_level="info")):
        pass

    captured = capsys.readouterr()
    assert "store_opened" not in captured.err
    assert captured.out == ""
