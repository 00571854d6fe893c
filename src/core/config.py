"""Runtime configuration model for nimbus-dump.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_TABLES,
    MIN_MAX_TABLES,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import NimbusDumpConfigError


@dataclass(frozen=True)
class NimbusDumpConfig:
    """Validated runtime configuration.

    Attributes:
        max_tables: Named-table capacity used when opening the store.
        log_level: Minimum structured log level written to stderr.
    """

    max_tables: int = DEFAULT_MAX_TABLES
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "NimbusDumpConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            NimbusDumpConfigError: If environment values are invalid.
        """
        max_tables_value = os.getenv("NIMBUS_DUMP_MAX_TABLES", str(DEFAULT_MAX_TABLES))
        log_level_value = os.getenv("NIMBUS_DUMP_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        return cls(
            max_tables=_parse_max_tables(max_tables_value),
            log_level=_parse_log_level(log_level_value),
        )


def _parse_max_tables(raw_value: str) -> int:
    """Parse the table capacity environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed table capacity.

    Raises:
        NimbusDumpConfigError: If value is not an integer large enough
            to hold every inspected table.
    """
    try:
        max_tables = int(raw_value)
    except ValueError as error:
        raise NimbusDumpConfigError(
            "Invalid NIMBUS_DUMP_MAX_TABLES value: "
            f"expected integer, got '{raw_value}'. "
            "Set NIMBUS_DUMP_MAX_TABLES to a numeric value."
        ) from error
    if max_tables < MIN_MAX_TABLES:
        raise NimbusDumpConfigError(
            f"Invalid NIMBUS_DUMP_MAX_TABLES value {max_tables}: "
            f"at least {MIN_MAX_TABLES} named tables are required."
        )
    return max_tables


def _parse_log_level(raw_value: str) -> str:
    level = raw_value.strip().lower()
    if level not in SUPPORTED_LOG_LEVELS:
        supported_rows = ", ".join(SUPPORTED_LOG_LEVELS)
        raise NimbusDumpConfigError(
            f"Invalid NIMBUS_DUMP_LOG_LEVEL value '{raw_value}'. Use one of: {supported_rows}."
        )
    return level
