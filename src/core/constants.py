"""Core constants used across nimbus-dump modules.

This module centralizes table names, metadata keys, and value tags.
Keeping values here avoids magic literals in decoding logic.
"""

from __future__ import annotations

DEFAULT_MAX_TABLES = 6
MIN_MAX_TABLES = 4
DEFAULT_LOG_LEVEL = "warning"
SUPPORTED_LOG_LEVELS = ("debug", "info", "warning", "error")

META_TABLE_NAME = "meta"
ENROLLMENTS_TABLE_NAME = "enrollments"
EXPERIMENTS_TABLE_NAME = "experiments"
UPDATES_TABLE_NAME = "updates"
TABLE_NAMES = (
    META_TABLE_NAME,
    ENROLLMENTS_TABLE_NAME,
    EXPERIMENTS_TABLE_NAME,
    UPDATES_TABLE_NAME,
)

DB_VERSION_KEY = "db_version"
LEGACY_PARTICIPATION_KEY = "user-opt-in"
EXPERIMENT_PARTICIPATION_KEY = "user-opt-in-experiments"
ROLLOUT_PARTICIPATION_KEY = "user-opt-in-rollouts"

U16_MAX = 2**16 - 1
U64_MAX = 2**64 - 1
BINCODE_LENGTH_PREFIX_SIZE = 8
SAFE_MODE_FILE_NAME = "data.safe.bin"

NO_ENROLLMENTS_MESSAGE = "No enrollments"
NO_EXPERIMENTS_MESSAGE = "No experiments"
ENROLLMENTS_TITLE = "Enrollments:"
EXPERIMENTS_TITLE = "Experiments:"
