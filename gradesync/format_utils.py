# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Plain-text rendering of rosters, upload history and status messages."""

from __future__ import annotations

from typing import Sequence

import arrow

from gradesync.records import Number, StudentRecord, UploadHistoryEntry
from gradesync.status import StatusKind, StatusMessage


def format_number(x: Number) -> str:
    """Show integral values without a trailing ``.0``, others to two places at most."""
    if isinstance(x, float):
        if x.is_integer():
            return str(int(x))
        return f"{x:.2f}".rstrip("0").rstrip(".")
    return str(x)


def format_file_size(nbytes: int) -> str:
    return f"{nbytes / 1024:.1f} KB"


def format_upload_date(when: arrow.Arrow) -> str:
    return when.to("local").format("YYYY-MM-DD [at] HH:mm:ss")


def format_status(msg: StatusMessage | None) -> str:
    if msg is None:
        return ""
    prefix = {
        StatusKind.SUCCESS: "OK",
        StatusKind.INFO: "Note",
        StatusKind.ERROR: "Error",
    }[msg.kind]
    return f"{prefix}: {msg.text}"


def _table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in header]
    for row in rows:
        widths = [max(w, len(c)) for w, c in zip(widths, row)]
    lines = ["  ".join(h.ljust(w) for h, w in zip(header, widths)).rstrip()]
    lines.append("  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip())
    return "\n".join(lines)


def format_roster(roster: Sequence[StudentRecord], *, show_ids: bool = True) -> str:
    """Tabulate the roster, one student per line, in the order given."""
    header = ["Student ID", "Name", "Total Marks", "Marks Obtained", "Percentage"]
    if show_ids:
        header.insert(0, "Record")
    rows = []
    for r in roster:
        row = [
            r.student_id,
            r.student_name,
            format_number(r.total_marks),
            format_number(r.marks_obtained),
            f"{format_number(r.percentage)}%",
        ]
        if show_ids:
            row.insert(0, r.id)
        rows.append(row)
    return f"Students ({len(roster)})\n" + _table(header, rows)


def format_history(history: Sequence[UploadHistoryEntry]) -> str:
    if not history:
        return "No upload history found."
    header = ["Date & Time", "Filename", "Type", "Students", "Size", "Status"]
    rows = [
        [
            format_upload_date(h.upload_date),
            h.filename,
            h.file_type,
            str(h.students_count),
            format_file_size(h.file_size),
            "Success" if h.succeeded else "Failed",
        ]
        for h in history
    ]
    return _table(header, rows)
