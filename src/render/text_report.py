"""Text sections for each inspected table.

Every function returns a finished section ending with a blank line, so
the CLI can print sections one after another as tables are read.
"""

from __future__ import annotations

from dataclasses import fields
import json
from typing import Sequence

from tabulate import tabulate

from core.constants import (
    ENROLLMENTS_TITLE,
    EXPERIMENTS_TITLE,
    NO_ENROLLMENTS_MESSAGE,
    NO_EXPERIMENTS_MESSAGE,
)
from core.types import (
    Enrollment,
    EnrollmentStatus,
    Experiment,
    ParticipationSettings,
    UpdateEntry,
)

_TABLE_FORMAT = "presto"


def render_metadata(settings: ParticipationSettings) -> str:
    """Render schema version and participation flags as labelled lines."""
    lines = [
        f"db_version:               {settings.db_version}",
        f"experiment participation: {_format_bool(settings.experiment_participation)}",
        f"rollout participation:    {_format_bool(settings.rollout_participation)}",
    ]
    return _section(lines)


def render_enrollments(enrollments: Sequence[Enrollment]) -> str:
    """Render enrollments as a slug/status table."""
    if not enrollments:
        return _section([NO_ENROLLMENTS_MESSAGE])
    rows = [[enrollment.slug, format_status(enrollment.status)] for enrollment in enrollments]
    return _section([ENROLLMENTS_TITLE, _table(["Slug", "Enrollment Status"], rows)])


def render_experiments(experiments: Sequence[Experiment]) -> str:
    """Render experiment definitions as a table.

    ``R/E`` is ``R`` for rollouts and ``E`` for experiments; ``Paused?``
    is ``Y`` when enrollment is paused and blank otherwise.
    """
    if not experiments:
        return _section([NO_EXPERIMENTS_MESSAGE])
    rows = [
        [
            experiment.slug,
            "R" if experiment.is_rollout else "E",
            "Y" if experiment.is_enrollment_paused else " ",
            ",".join(experiment.feature_ids),
        ]
        for experiment in experiments
    ]
    return _section(
        [EXPERIMENTS_TITLE, _table(["Slug", "R/E", "Paused?", "Feature IDs"], rows)]
    )


def render_updates(updates: Sequence[UpdateEntry]) -> str:
    """Render pending updates, one ``(key, value)`` line each.

    The empty placeholder and title are shared with the experiments
    section.
    """
    if not updates:
        return _section([NO_EXPERIMENTS_MESSAGE])
    lines = [EXPERIMENTS_TITLE]
    for update in updates:
        lines.append(f"  ({json.dumps(update.key)}, {json.dumps(update.value)})")
    return _section(lines)


def format_status(status: EnrollmentStatus) -> str:
    """Render a status variant as ``Tag { field: value, ... }``."""
    parts = [
        f"{field.name}: {json.dumps(getattr(status, field.name))}" for field in fields(status)
    ]
    return f"{status.tag} {{ {', '.join(parts)} }}"


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _table(headers: list[str], rows: list[list[str]]) -> str:
    return tabulate(rows, headers=headers, tablefmt=_TABLE_FORMAT, disable_numparse=True)


def _section(lines: list[str]) -> str:
    return "\n".join(lines) + "\n\n"
