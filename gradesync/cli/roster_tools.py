# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

from __future__ import annotations

from pathlib import Path

from gradesync.cli import with_controller
from gradesync.format_utils import format_history, format_roster, format_status


def _report(ctrl) -> bool:
    """Print the current status message, if any; False if it reports an error."""
    if ctrl.status is not None:
        print(format_status(ctrl.status))
        return not ctrl.status.is_error
    return True


@with_controller
def list_students(*, ctrl) -> bool:
    """Fetch and print the roster.

    Keyword Args:
        ctrl: An active RosterController.

    Returns:
        True unless the roster could not be fetched.
    """
    ctrl.activate()
    if ctrl.roster:
        print(format_roster(ctrl.roster))
    return _report(ctrl)


@with_controller
def show_history(*, ctrl) -> bool:
    """Fetch and print the log of past uploads.

    Returns:
        True iff the history was fetched.
    """
    if not ctrl.refresh_history():
        print("Error: could not fetch upload history.")
        return False
    print(format_history(ctrl.history))
    return True


@with_controller
def upload_file(f: Path, *, ctrl) -> bool:
    """Upload a spreadsheet or CSV file of students and show the new roster.

    Args:
        f: path to an ``.xlsx`` or ``.csv`` file.

    Keyword Args:
        ctrl: An active RosterController.

    Returns:
        True iff the server accepted the file.
    """
    ok = ctrl.submit_upload(f)
    _report(ctrl)
    if ok and ctrl.roster:
        print(format_roster(ctrl.roster))
    return ok


@with_controller
def edit_student(
    record_id: str,
    *,
    name: str | None = None,
    total: str | None = None,
    obtained: str | None = None,
    ctrl,
) -> bool:
    """Change the name and/or marks of one student record.

    Args:
        record_id: the server's id for the record (first column of ``list``).

    Keyword Args:
        name: new student name, or None to leave it.
        total: new total marks, as typed.
        obtained: new marks obtained, as typed.
        ctrl: An active RosterController.

    Returns:
        True iff the server accepted the change.
    """
    if not ctrl.refresh_roster():
        return _report(ctrl)
    record = ctrl.find(record_id)
    if record is None:
        print(f'Error: no student record with id "{record_id}".')
        return False
    ctrl.begin_edit(record)
    for field, value in (
        ("student_name", name),
        ("total_marks", total),
        ("marks_obtained", obtained),
    ):
        if value is not None:
            ctrl.update_draft_field(field, value)
    ok = ctrl.commit_edit()
    if not ok:
        ctrl.cancel_edit()
    return _report(ctrl) and ok


@with_controller
def delete_student(record_id: str, *, yes: bool = False, ctrl) -> bool:
    """Delete one student record, asking first unless ``yes``.

    Returns:
        True iff the server deleted it.
    """
    confirm = (lambda question: True) if yes else None
    ok = ctrl.delete_record(record_id, confirm=confirm)
    if not ok and ctrl.status is None:
        print("Not deleted.")
        return False
    return _report(ctrl) and ok
