"""Experiments table reader."""

from __future__ import annotations

from core.constants import EXPERIMENTS_TABLE_NAME
from core.record_shapes import BOOL, STRING, Field, ListShape, RecordShape
from core.types import Experiment, RawValue
from readers.table_reader import read_table
from store.environment import ReadView, StoreTable
from store.record_decoder import decode_record

EXPERIMENT_SHAPE = RecordShape(
    "experiment",
    (
        Field("slug", STRING),
        Field("isRollout", BOOL, attribute="is_rollout"),
        Field("isEnrollmentPaused", BOOL, attribute="is_enrollment_paused"),
        Field("featureIds", ListShape(STRING), attribute="feature_ids"),
    ),
    Experiment,
)


def read_experiments(table: StoreTable, view: ReadView) -> list[Experiment]:
    """Decode every experiment definition in native key order.

    Raises:
        TableDecodeError: If any experiment fails to decode.
    """
    return read_table(table, view, EXPERIMENTS_TABLE_NAME, _decode_experiment)


def _decode_experiment(key: bytes, raw_value: RawValue) -> Experiment:
    return decode_record(raw_value, EXPERIMENT_SHAPE)
