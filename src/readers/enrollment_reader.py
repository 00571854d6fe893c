"""Enrollments table reader."""

from __future__ import annotations

from core.constants import ENROLLMENTS_TABLE_NAME
from core.record_shapes import STRING, U64, Field, RecordShape, VariantShape
from core.types import (
    Disqualified,
    Enrolled,
    Enrollment,
    EnrollmentFailed,
    NotEnrolled,
    RawValue,
    WasEnrolled,
)
from readers.table_reader import read_table
from store.environment import ReadView, StoreTable
from store.record_decoder import decode_record

ENROLLMENT_STATUS_SHAPE = VariantShape(
    "enrollment status",
    {
        Enrolled.tag: RecordShape(
            Enrolled.tag,
            (Field("reason", STRING), Field("branch", STRING)),
            Enrolled,
        ),
        NotEnrolled.tag: RecordShape(
            NotEnrolled.tag,
            (Field("reason", STRING),),
            NotEnrolled,
        ),
        Disqualified.tag: RecordShape(
            Disqualified.tag,
            (Field("reason", STRING), Field("branch", STRING)),
            Disqualified,
        ),
        WasEnrolled.tag: RecordShape(
            WasEnrolled.tag,
            (Field("branch", STRING), Field("experiment_ended_at", U64)),
            WasEnrolled,
        ),
        EnrollmentFailed.tag: RecordShape(
            EnrollmentFailed.tag,
            (Field("reason", STRING),),
            EnrollmentFailed,
        ),
    },
)

ENROLLMENT_SHAPE = RecordShape(
    "enrollment",
    (Field("slug", STRING), Field("status", ENROLLMENT_STATUS_SHAPE)),
    Enrollment,
)


def read_enrollments(table: StoreTable, view: ReadView) -> list[Enrollment]:
    """Decode every enrollment in native key order.

    Raises:
        TableDecodeError: If any enrollment fails to decode.
    """
    return read_table(table, view, ENROLLMENTS_TABLE_NAME, _decode_enrollment)


def _decode_enrollment(key: bytes, raw_value: RawValue) -> Enrollment:
    return decode_record(raw_value, ENROLLMENT_SHAPE)
