"""Public SDK surface for nimbus-dump.

This module provides a stable import path for scripted inspection.
It re-exports the inspector, typed records, and decoding helpers.
"""

from __future__ import annotations

from core.config import NimbusDumpConfig
from core.types import (
    Disqualified,
    Enrolled,
    Enrollment,
    EnrollmentFailed,
    Experiment,
    NotEnrolled,
    ParticipationSettings,
    RawValue,
    UpdateEntry,
    WasEnrolled,
)
from readers.metadata_reader import resolve_participation
from readers.store_inspector import StoreInspector, inspect_store
from store.record_decoder import decode_record

__all__ = [
    "Disqualified",
    "Enrolled",
    "Enrollment",
    "EnrollmentFailed",
    "Experiment",
    "NimbusDumpConfig",
    "NotEnrolled",
    "ParticipationSettings",
    "RawValue",
    "StoreInspector",
    "UpdateEntry",
    "WasEnrolled",
    "decode_record",
    "inspect_store",
    "resolve_participation",
]
