# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

import dataclasses
import math

from pytest import raises

from gradesync.records import (
    EditDraft,
    StudentRecord,
    UploadHistoryEntry,
    coerce_mark,
)

ROW = {
    "_id": 7,
    "student_id": "S007",
    "student_name": "Bond",
    "total_marks": 100,
    "marks_obtained": 70.5,
    "percentage": "70.5",
}


def test_record_from_dict() -> None:
    r = StudentRecord.from_dict(ROW)
    assert r.id == "7"
    assert r.marks_obtained == 70.5
    assert r.percentage == 70.5


def test_record_plain_id_accepted() -> None:
    d = dict(ROW)
    d.pop("_id")
    d["id"] = "abc"
    assert StudentRecord.from_dict(d).id == "abc"


def test_record_without_id_rejected() -> None:
    d = dict(ROW)
    d.pop("_id")
    with raises(ValueError):
        StudentRecord.from_dict(d)
    with raises(TypeError):
        StudentRecord.from_dict(["not", "a", "dict"])


def test_record_bool_is_not_a_number() -> None:
    with raises(ValueError):
        StudentRecord.from_dict(dict(ROW, total_marks=True))


def test_record_is_frozen() -> None:
    r = StudentRecord.from_dict(ROW)
    with raises(dataclasses.FrozenInstanceError):
        r.student_name = "Blofeld"


def test_payload_has_no_id() -> None:
    p = StudentRecord.from_dict(ROW).to_payload()
    assert "id" not in p and "_id" not in p
    assert p["student_name"] == "Bond"


def test_history_entry() -> None:
    h = UploadHistoryEntry.from_dict(
        {
            "upload_date": "2024-11-05T09:30:00.000Z",
            "filename": "x.xlsx",
            "file_type": "xlsx",
            "file_size": 10240,
            "students_count": 4,
            "status": "error",
        }
    )
    assert not h.succeeded
    assert h.upload_date.month == 11


def test_history_entry_bad_date() -> None:
    with raises(ValueError):
        UploadHistoryEntry.from_dict({"upload_date": "yesterday-ish"})
    with raises(ValueError):
        UploadHistoryEntry.from_dict({"filename": "no date"})


def test_coerce_mark() -> None:
    assert coerce_mark("80") == 80
    assert isinstance(coerce_mark("80"), int)
    assert coerce_mark(" 72.5 ") == 72.5
    assert coerce_mark(0) == 0
    assert coerce_mark(12.0) == 12.0


def test_coerce_mark_rejects() -> None:
    for bad in ("", "  ", "abc", "-1", -3, "nan", math.inf, True, None):
        with raises(ValueError):
            coerce_mark(bad)


def test_draft_update_and_invalid() -> None:
    d = EditDraft.from_record(StudentRecord.from_dict(ROW))
    d.update_field("total_marks", "90")
    assert d.total_marks == 90
    assert d.is_valid
    d.update_field("marks_obtained", "lots")
    assert d.marks_obtained == 70.5
    assert not d.is_valid
    assert d.invalid == {"marks_obtained": "lots"}
    assert "Marks obtained" in d.problems()[0]
    d.update_field("marks_obtained", "71")
    assert d.is_valid
    assert d.marks_obtained == 71


def test_draft_refuses_percentage_and_unknown() -> None:
    d = EditDraft.from_record(StudentRecord.from_dict(ROW))
    with raises(KeyError):
        d.update_field("percentage", 99)
    with raises(KeyError):
        d.update_field("id", "8")


def test_draft_copy_is_independent() -> None:
    d = EditDraft.from_record(StudentRecord.from_dict(ROW))
    d.update_field("total_marks", "x")
    c = d.copy()
    c.update_field("total_marks", "5")
    assert not d.is_valid
    assert c.is_valid


def test_draft_to_record() -> None:
    r = StudentRecord.from_dict(ROW)
    d = EditDraft.from_record(r)
    assert d.to_record() == r
    d.update_field("student_name", "James")
    assert d.to_record().student_name == "James"
    assert r.student_name == "Bond"
