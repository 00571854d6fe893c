"""Per-table inspection of an opened store.

This module opens each table on demand, holds exactly one read view
while draining it, and releases the view before returning.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Callable, TypeVar

from core.config import NimbusDumpConfig
from core.constants import (
    ENROLLMENTS_TABLE_NAME,
    EXPERIMENTS_TABLE_NAME,
    META_TABLE_NAME,
    UPDATES_TABLE_NAME,
)
from core.logging_config import ensure_logging_configured
from core.types import Enrollment, Experiment, ParticipationSettings, UpdateEntry
from readers.enrollment_reader import read_enrollments
from readers.experiment_reader import read_experiments
from readers.metadata_reader import read_metadata
from readers.update_reader import read_updates
from store.environment import ReadView, StoreEnvironment, StoreTable, open_environment

ResultT = TypeVar("ResultT")


class StoreInspector:
    """Read-only inspector over the four Nimbus tables."""

    def __init__(self, environment: StoreEnvironment) -> None:
        self._environment = environment

    def __enter__(self) -> "StoreInspector":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def metadata(self) -> ParticipationSettings:
        """Resolve schema version and participation flags."""
        return self._with_table(META_TABLE_NAME, read_metadata)

    def enrollments(self) -> list[Enrollment]:
        """Read all enrollments."""
        return self._with_table(ENROLLMENTS_TABLE_NAME, read_enrollments)

    def experiments(self) -> list[Experiment]:
        """Read all experiment definitions."""
        return self._with_table(EXPERIMENTS_TABLE_NAME, read_experiments)

    def updates(self) -> list[UpdateEntry]:
        """Read all pending updates."""
        return self._with_table(UPDATES_TABLE_NAME, read_updates)

    def close(self) -> None:
        """Release the underlying environment."""
        self._environment.close()

    def _with_table(
        self,
        name: str,
        reader: Callable[[StoreTable, ReadView], ResultT],
    ) -> ResultT:
        table = self._environment.open_table(name)
        with self._environment.read_view() as view:
            return reader(table, view)


def inspect_store(path: Path, config: NimbusDumpConfig | None = None) -> StoreInspector:
    """Open a store directory for inspection.

    Args:
        path: Store directory.
        config: Optional runtime configuration.

    Structured logging is sent to stderr at the configured level unless
    the caller has already configured structlog.

    Returns:
        Inspector that closes the store when used as a context manager.

    Raises:
        StoreOpenError: If the store cannot be opened.
    """
    resolved_config = config or NimbusDumpConfig.from_env()
    ensure_logging_configured(resolved_config.log_level)
    return StoreInspector(open_environment(path, resolved_config.max_tables))
