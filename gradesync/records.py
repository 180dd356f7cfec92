# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Student records, upload-history entries and edit drafts.

Records arrive from the server as JSON dicts with snake_case keys; the
identifier is ``_id`` on the servers we know of, but plain ``id`` is
accepted too.  Records are frozen: the roster held by the controller
is a snapshot and nobody gets to patch it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import math
from typing import Any, Union

import arrow

Number = Union[int, float]

# the fields a user may change in an edit; percentage is the server's business
EDITABLE_FIELDS = ("student_name", "total_marks", "marks_obtained")
NUMERIC_FIELDS = ("total_marks", "marks_obtained")

FIELD_LABELS = {
    "student_id": "Student ID",
    "student_name": "Student name",
    "total_marks": "Total marks",
    "marks_obtained": "Marks obtained",
    "percentage": "Percentage",
}


def _number_from_json(value: Any, key: str) -> Number:
    if isinstance(value, bool) or value is None:
        raise ValueError(f'"{key}" is not a number: {value!r}')
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return float(value)
    raise ValueError(f'"{key}" is not a number: {value!r}')


def coerce_mark(value: Any) -> Number:
    """Convert user input for a marks field to a non-negative number.

    Args:
        value: a number, or the text typed into a form.

    Returns:
        An ``int`` if the value is integral as typed, otherwise a ``float``.

    Raises:
        ValueError: empty, unparseable, negative, NaN or infinite input.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float)):
        x = value
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            raise ValueError("A number is required")
        try:
            x = int(s)
        except ValueError:
            try:
                x = float(s)
            except ValueError:
                raise ValueError(f'Not a number: "{s}"') from None
    else:
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(x, float) and not math.isfinite(x):
        raise ValueError(f"Not a finite number: {value!r}")
    if x < 0:
        raise ValueError(f"Marks cannot be negative: {value!r}")
    return x


@dataclass(frozen=True, kw_only=True)
class StudentRecord:
    """One row of the roster, as last seen on the server."""

    id: str
    student_id: str
    student_name: str
    total_marks: Number
    marks_obtained: Number
    percentage: Number

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> StudentRecord:
        """Build a record from the server's JSON.

        Raises:
            ValueError: missing id, or a marks field that is not a number.
            TypeError: ``d`` is not a dict.
        """
        if not isinstance(d, dict):
            raise TypeError(f"Expected a dict for a student record, got {d!r}")
        rid = d.get("_id", d.get("id"))
        if rid is None or rid == "":
            raise ValueError(f"Student record has no id: {d!r}")
        return cls(
            id=str(rid),
            student_id=str(d.get("student_id", "")),
            student_name=str(d.get("student_name", "")),
            total_marks=_number_from_json(d.get("total_marks"), "total_marks"),
            marks_obtained=_number_from_json(d.get("marks_obtained"), "marks_obtained"),
            percentage=_number_from_json(d.get("percentage", 0), "percentage"),
        )

    def to_payload(self) -> dict[str, Any]:
        """The record as sent to the server in an update: everything but the id."""
        return {
            "student_id": self.student_id,
            "student_name": self.student_name,
            "total_marks": self.total_marks,
            "marks_obtained": self.marks_obtained,
            "percentage": self.percentage,
        }


@dataclass(frozen=True, kw_only=True)
class UploadHistoryEntry:
    """One line of the server's upload log."""

    upload_date: arrow.Arrow
    filename: str
    file_type: str
    file_size: int
    students_count: int
    status: str

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> UploadHistoryEntry:
        if not isinstance(d, dict):
            raise TypeError(f"Expected a dict for an upload entry, got {d!r}")
        try:
            when = arrow.get(d["upload_date"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Bad upload_date in {d!r}: {e}") from None
        return cls(
            upload_date=when,
            filename=str(d.get("filename", "")),
            file_type=str(d.get("file_type", "")),
            file_size=int(d.get("file_size") or 0),
            students_count=int(d.get("students_count") or 0),
            status=str(d.get("status", "error")),
        )

    @property
    def succeeded(self) -> bool:
        return self.status == "success"


@dataclass
class EditDraft:
    """A local, not-yet-saved copy of one student record.

    Numeric fields are coerced as they are set.  Input that cannot be
    coerced leaves the last good value in place and is remembered in
    :attr:`invalid` (field name to the offending text) until a valid
    value replaces it; such a draft cannot be saved.
    """

    id: str
    student_id: str
    student_name: str
    total_marks: Number
    marks_obtained: Number
    percentage: Number
    invalid: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: StudentRecord) -> EditDraft:
        return cls(
            **{f.name: getattr(record, f.name) for f in fields(StudentRecord)},
        )

    def copy(self) -> EditDraft:
        return replace(self, invalid=dict(self.invalid))

    def update_field(self, name: str, value: Any) -> None:
        """Set one editable field, coercing numeric input.

        Raises:
            KeyError: not an editable field.
        """
        if name not in EDITABLE_FIELDS:
            raise KeyError(f'"{name}" cannot be edited')
        if name in NUMERIC_FIELDS:
            try:
                value = coerce_mark(value)
            except ValueError:
                self.invalid[name] = str(value)
                return
        else:
            value = str(value)
        self.invalid.pop(name, None)
        setattr(self, name, value)

    @property
    def is_valid(self) -> bool:
        return not self.invalid

    def problems(self) -> list[str]:
        """Describe each field holding invalid input, for showing to a user."""
        return [
            f'{FIELD_LABELS[k]} must be a non-negative number, not "{v}"'
            for k, v in self.invalid.items()
        ]

    def to_record(self) -> StudentRecord:
        return StudentRecord(
            id=self.id,
            student_id=self.student_id,
            student_name=self.student_name,
            total_marks=self.total_marks,
            marks_obtained=self.marks_obtained,
            percentage=self.percentage,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.to_record().to_payload()
