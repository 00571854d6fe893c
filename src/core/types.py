"""Shared typed models.

This module defines immutable records decoded from each store table.
Readers produce them and the renderer consumes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union


class ValueType(IntEnum):
    """Type tags written as the first byte of every stored value."""

    BOOL = 1
    U64 = 2
    I64 = 3
    F64 = 4
    INSTANT = 5
    UUID = 6
    STR = 7
    JSON = 8
    BLOB = 9


@dataclass(frozen=True)
class RawValue:
    """One stored value split into its type tag and encoded payload.

    Attributes:
        tag: Raw type byte, 0 when the stored value was empty.
        payload: Encoded bytes following the type byte.
    """

    tag: int
    payload: bytes

    @property
    def type_name(self) -> str:
        """Return a readable name for the type tag."""
        try:
            return ValueType(self.tag).name.lower()
        except ValueError:
            return f"unknown({self.tag})"


@dataclass(frozen=True)
class ParticipationSettings:
    """Participation flags resolved from the metadata table.

    Attributes:
        db_version: Schema version read from the store.
        experiment_participation: Whether experiments may enroll the user.
        rollout_participation: Whether rollouts may enroll the user.
    """

    db_version: int
    experiment_participation: bool
    rollout_participation: bool


@dataclass(frozen=True)
class Enrolled:
    """User is enrolled in a branch."""

    tag: ClassVar[str] = "Enrolled"

    reason: str
    branch: str


@dataclass(frozen=True)
class NotEnrolled:
    """User was evaluated and not enrolled."""

    tag: ClassVar[str] = "NotEnrolled"

    reason: str


@dataclass(frozen=True)
class Disqualified:
    """User was enrolled and later disqualified."""

    tag: ClassVar[str] = "Disqualified"

    reason: str
    branch: str


@dataclass(frozen=True)
class WasEnrolled:
    """User was enrolled in an experiment that has since ended."""

    tag: ClassVar[str] = "WasEnrolled"

    branch: str
    experiment_ended_at: int


@dataclass(frozen=True)
class EnrollmentFailed:
    """Enrollment evaluation failed."""

    tag: ClassVar[str] = "Error"

    reason: str


EnrollmentStatus = Union[Enrolled, NotEnrolled, Disqualified, WasEnrolled, EnrollmentFailed]


@dataclass(frozen=True)
class Enrollment:
    """One row of the enrollments table.

    Attributes:
        slug: Experiment identifier.
        status: Closed enrollment status variant.
    """

    slug: str
    status: EnrollmentStatus


@dataclass(frozen=True)
class Experiment:
    """One row of the experiments table.

    Attributes:
        slug: Experiment identifier.
        is_rollout: Rollout rather than a controlled experiment.
        is_enrollment_paused: Whether new enrollment is paused.
        feature_ids: Feature identifiers in stored order.
    """

    slug: str
    is_rollout: bool
    is_enrollment_paused: bool
    feature_ids: tuple[str, ...]


@dataclass(frozen=True)
class UpdateEntry:
    """One pending update; the value is an unvalidated JSON tree."""

    key: str
    value: object
