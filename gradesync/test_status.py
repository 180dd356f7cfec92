# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

from dataclasses import FrozenInstanceError

from pytest import raises

from gradesync.status import StatusKind, StatusMessage


def test_kind_is_explicit_not_sniffed() -> None:
    # the word "Success" in an error must not make it a success
    m = StatusMessage.error("Success was not achieved")
    assert m.is_error
    assert m.kind is StatusKind.ERROR
    m = StatusMessage.success("Student deleted")
    assert not m.is_error


def test_equality_and_dict() -> None:
    a = StatusMessage.info("No students")
    assert a == StatusMessage(StatusKind.INFO, "No students")
    assert a != StatusMessage.error("No students")
    assert a.to_dict() == {"kind": "info", "text": "No students"}
    assert str(a) == "No students"


def test_kind_from_string() -> None:
    assert StatusMessage("success", "yay").kind is StatusKind.SUCCESS


def test_immutable_and_hashable() -> None:
    m = StatusMessage.success("Student updated successfully")
    with raises(FrozenInstanceError):
        m.text = "changed"
    assert len({m, StatusMessage.success("Student updated successfully")}) == 1
