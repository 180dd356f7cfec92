# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

import gradesync.grade_exceptions
from gradesync.grade_exceptions import (
    GradeBenignException,
    GradeConnectionError,
    GradeException,
    GradeNoStudent,
    GradeTimeoutError,
)


def test_grade_exc_string() -> None:
    e = GradeException("foo")
    assert str(e) == "foo"


def test_exc_inheritance() -> None:
    e = GradeNoStudent()
    assert isinstance(e, GradeBenignException)
    assert isinstance(e, GradeException)


def test_timeout_is_a_connection_error() -> None:
    assert issubclass(GradeTimeoutError, GradeConnectionError)


def test_exc_no_student_has_default_msg() -> None:
    e = GradeNoStudent()
    assert "no such student" in str(e).lower()
    e = GradeNoStudent("foo")
    assert str(e) == "foo"


def test_exc_all_print_properly() -> None:
    excs = [
        getattr(gradesync.grade_exceptions, e)
        for e in dir(gradesync.grade_exceptions)
        if e.startswith("Grade")
    ]
    assert len(excs) > 5
    for exc in excs:
        assert str(exc("foo")) == "foo"
