"""Schema-version aware participation resolution.

The metadata table records a schema version that decides which keys
hold the participation flags. Versions are mapped to layouts through
an explicit table. A version without an entry is rejected.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Optional

from core.constants import (
    DB_VERSION_KEY,
    EXPERIMENT_PARTICIPATION_KEY,
    LEGACY_PARTICIPATION_KEY,
    META_TABLE_NAME,
    ROLLOUT_PARTICIPATION_KEY,
)
from core.errors import (
    CorruptVersionError,
    MissingParticipationKeyError,
    MissingVersionError,
    RecordDecodeError,
    TableDecodeError,
    UnsupportedVersionError,
)
from core.logging_config import get_logger
from core.record_shapes import BOOL, U16
from core.types import ParticipationSettings, RawValue
from readers.table_reader import format_key
from store.environment import ReadView, StoreTable
from store.record_decoder import decode_record

_LOGGER = get_logger(__name__)

MetadataLookup = Callable[[str], Optional[RawValue]]


class ParticipationLayout(Enum):
    """Known layouts of the participation keys."""

    LEGACY_SHARED_FLAG = "legacy-shared-flag"
    SPLIT_FLAGS = "split-flags"


LAYOUT_BY_VERSION: dict[int, ParticipationLayout] = {
    1: ParticipationLayout.LEGACY_SHARED_FLAG,
    2: ParticipationLayout.LEGACY_SHARED_FLAG,
    3: ParticipationLayout.SPLIT_FLAGS,
}


def resolve_participation(lookup: MetadataLookup) -> ParticipationSettings:
    """Resolve participation flags from metadata entries.

    Args:
        lookup: Returns the raw value stored under a metadata key, or
            ``None`` when the key is absent.

    Returns:
        Schema version with both participation flags.

    Raises:
        MissingVersionError: If the version key is absent.
        CorruptVersionError: If the version value cannot be decoded.
        UnsupportedVersionError: If the version has no known layout.
        MissingParticipationKeyError: If a key required by the layout is absent.
        TableDecodeError: If a participation value cannot be decoded.
    """
    db_version = _read_db_version(lookup)
    layout = LAYOUT_BY_VERSION.get(db_version)
    if layout is None:
        raise UnsupportedVersionError(db_version)
    experiment_participation, rollout_participation = _LAYOUT_READERS[layout](
        lookup, db_version
    )
    _LOGGER.info(
        "participation_resolved",
        db_version=db_version,
        layout=layout.value,
        experiment_participation=experiment_participation,
        rollout_participation=rollout_participation,
    )
    return ParticipationSettings(
        db_version=db_version,
        experiment_participation=experiment_participation,
        rollout_participation=rollout_participation,
    )


def read_metadata(table: StoreTable, view: ReadView) -> ParticipationSettings:
    """Resolve participation settings from an opened metadata table."""
    return resolve_participation(lambda key: table.get(view, key.encode("utf-8")))


def _read_db_version(lookup: MetadataLookup) -> int:
    raw_value = lookup(DB_VERSION_KEY)
    if raw_value is None:
        raise MissingVersionError(DB_VERSION_KEY)
    try:
        return int(decode_record(raw_value, U16))
    except RecordDecodeError as error:
        raise CorruptVersionError(DB_VERSION_KEY, error) from error


def _read_flag(lookup: MetadataLookup, key: str, db_version: int) -> bool:
    raw_value = lookup(key)
    if raw_value is None:
        raise MissingParticipationKeyError(key, db_version)
    try:
        return bool(decode_record(raw_value, BOOL))
    except RecordDecodeError as error:
        raise TableDecodeError(
            META_TABLE_NAME, format_key(key.encode("utf-8")), error
        ) from error


def _read_legacy_flags(lookup: MetadataLookup, db_version: int) -> tuple[bool, bool]:
    participation = _read_flag(lookup, LEGACY_PARTICIPATION_KEY, db_version)
    return participation, participation


def _read_split_flags(lookup: MetadataLookup, db_version: int) -> tuple[bool, bool]:
    return (
        _read_flag(lookup, EXPERIMENT_PARTICIPATION_KEY, db_version),
        _read_flag(lookup, ROLLOUT_PARTICIPATION_KEY, db_version),
    )


_LAYOUT_READERS: dict[
    ParticipationLayout, Callable[[MetadataLookup, int], tuple[bool, bool]]
] = {
    ParticipationLayout.LEGACY_SHARED_FLAG: _read_legacy_flags,
    ParticipationLayout.SPLIT_FLAGS: _read_split_flags,
}
