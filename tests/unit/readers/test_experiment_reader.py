"""Unit tests for the experiments table reader."""

from __future__ import annotations

import pytest

from core.errors import SchemaMismatchError, TableDecodeError
from core.types import Experiment
from readers.experiment_reader import read_experiments
from tests.store_fakes import FakeEnvironment, encode_json, encode_json_text


def _read(entries: dict[bytes, bytes]) -> list[Experiment]:
    environment = FakeEnvironment({"experiments": entries})
    table = environment.open_table("experiments")
    with environment.read_view() as view:
        return read_experiments(table, view)


def _payload(slug: str, **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "slug": slug,
        "isRollout": True,
        "isEnrollmentPaused": True,
        "featureIds": ["b-feature", "a-feature"],
        "branches": [{"slug": "control"}],
    }
    payload.update(overrides)
    return payload


def test_read_experiments_decodes_camel_case_fields() -> None:
    """Experiment keys should map onto snake_case attributes."""
    experiments = _read({b"exp-1": encode_json(_payload("exp-1"))})

    assert experiments == [
        Experiment(
            slug="exp-1",
            is_rollout=True,
            is_enrollment_paused=True,
            feature_ids=("b-feature", "a-feature"),
        )
    ]


def test_read_experiments_returns_empty_list_for_empty_table() -> None:
    """Empty experiments table should produce no records."""
    assert _read({}) == []


def test_missing_feature_ids_aborts_the_read() -> None:
    """Every experiment must list its feature ids."""
    payload = _payload("exp-2")
    del payload["featureIds"]

    with pytest.raises(TableDecodeError) as error_info:
        _read({b"exp-1": encode_json(_payload("exp-1")), b"exp-2": encode_json(payload)})

    assert error_info.value.key == '"exp-2"' and isinstance(
        error_info.value.cause, SchemaMismatchError
    )


def test_non_json_value_aborts_the_read() -> None:
    """A value stored as a plain string is not a valid experiment."""
    with pytest.raises(TableDecodeError, match="Unsupported value type 'str'"):
        _read({b"exp-1": encode_json_text("{}", tag=7)})
