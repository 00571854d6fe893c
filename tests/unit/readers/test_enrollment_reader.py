"""Unit tests for the enrollments table reader."""

from __future__ import annotations

import pytest

from core.errors import SchemaMismatchError, TableDecodeError
from core.types import (
    Disqualified,
    Enrolled,
    Enrollment,
    EnrollmentFailed,
    NotEnrolled,
    WasEnrolled,
)
from readers.enrollment_reader import ENROLLMENT_SHAPE, read_enrollments
from store.record_decoder import decode_record
from tests.store_fakes import FakeEnvironment, encode_json, json_value


def _read(entries: dict[bytes, bytes]) -> list[Enrollment]:
    environment = FakeEnvironment({"enrollments": entries})
    table = environment.open_table("enrollments")
    with environment.read_view() as view:
        return read_enrollments(table, view)


def test_enrolled_status_decodes_every_field() -> None:
    """Enrolled payload should decode into an identical record."""
    payload = {
        "slug": "exp-1",
        "status": {"Enrolled": {"reason": "Qualified", "branch": "treatment"}},
    }

    enrollment = decode_record(json_value(payload), ENROLLMENT_SHAPE)

    assert enrollment == Enrollment(
        slug="exp-1",
        status=Enrolled(reason="Qualified", branch="treatment"),
    )


@pytest.mark.parametrize(
    ("status_payload", "expected"),
    [
        ({"NotEnrolled": {"reason": "NotTargeted"}}, NotEnrolled(reason="NotTargeted")),
        (
            {"Disqualified": {"reason": "OptOut", "branch": "control"}},
            Disqualified(reason="OptOut", branch="control"),
        ),
        (
            {"WasEnrolled": {"branch": "control", "experiment_ended_at": 1700000000}},
            WasEnrolled(branch="control", experiment_ended_at=1700000000),
        ),
        ({"Error": {"reason": "bad targeting"}}, EnrollmentFailed(reason="bad targeting")),
    ],
)
def test_each_status_variant_decodes(status_payload: dict, expected: object) -> None:
    """All five variants of the closed status set should decode."""
    enrollment = decode_record(
        json_value({"slug": "exp", "status": status_payload}),
        ENROLLMENT_SHAPE,
    )

    assert enrollment.status == expected


def test_unknown_status_tag_is_schema_mismatch() -> None:
    """Tags outside the five known shapes must fail."""
    payload = {"slug": "exp-1", "status": {"Paused": {"reason": "x"}}}

    with pytest.raises(SchemaMismatchError, match="unknown enrollment status variant 'Paused'"):
        decode_record(json_value(payload), ENROLLMENT_SHAPE)


def test_bare_string_status_is_schema_mismatch() -> None:
    """Status must be an object keyed by the variant tag."""
    with pytest.raises(SchemaMismatchError):
        decode_record(json_value({"slug": "exp-1", "status": "Enrolled"}), ENROLLMENT_SHAPE)


def test_read_enrollments_returns_empty_list_for_empty_table() -> None:
    """Empty table is a valid state, not an error."""
    assert _read({}) == []


def test_read_enrollments_keeps_key_order_and_ignores_extra_fields() -> None:
    """Records come back in key order with unknown fields dropped."""
    entries = {
        b"b-exp": encode_json(
            {"slug": "b-exp", "status": {"NotEnrolled": {"reason": "x"}}, "extra": 1}
        ),
        b"a-exp": encode_json({"slug": "a-exp", "status": {"Error": {"reason": "y"}}}),
    }

    enrollments = _read(entries)

    assert [enrollment.slug for enrollment in enrollments] == ["a-exp", "b-exp"]


def test_one_malformed_enrollment_aborts_the_read() -> None:
    """A bad record among good ones fails the table and names its key."""
    entries = {
        b"exp-1": encode_json({"slug": "exp-1", "status": {"Error": {"reason": "y"}}}),
        b"exp-2": encode_json({"slug": "exp-2", "status": {"Unknown": {}}}),
        b"exp-3": encode_json({"slug": "exp-3", "status": {"Error": {"reason": "z"}}}),
    }

    with pytest.raises(TableDecodeError) as error_info:
        _read(entries)

    assert (error_info.value.table_name, error_info.value.key) == ("enrollments", '"exp-2"')
