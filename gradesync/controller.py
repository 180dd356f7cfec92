# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Keep a local snapshot of the roster and upload history in step with the server.

The :class:`RosterController` owns all the client-side state: the
roster, the upload history, at most one edit draft, the current status
message and the busy flags.  A view layer holds a reference to one
controller, calls its operations and redraws from its properties.

The server is the only source of truth.  After any successful change
the controller throws its copy away and fetches again, rather than
guessing at ids and percentages the server computes.  Failures never
escape: they are logged and turned into a status message.
"""

from __future__ import annotations

import logging
from pathlib import Path
import threading
from typing import Any, Callable

from gradesync.grade_exceptions import GradeException
from gradesync.records import EditDraft, StudentRecord, UploadHistoryEntry
from gradesync.status import StatusMessage

log = logging.getLogger("controller")

MSG_NO_STUDENTS = "No students found. Upload a file to get started."
MSG_CONNECT_FAILED = "Failed to connect to server. Please check if backend is running."
MSG_UPLOAD_FAILED = "Failed to upload file - Check backend connection"
MSG_UPDATED = "Student updated successfully"
MSG_UPDATE_FAILED = "Failed to update student"
MSG_DELETED = "Student deleted successfully"
MSG_DELETE_FAILED = "Failed to delete student"
CONFIRM_DELETE = "Are you sure you want to delete this student?"


class RosterController:
    """The roster, the upload history and everything a user can do to them.

    Args:
        msgr: the server collaborator, normally a
            :class:`gradesync.messenger.Messenger`.  Anything with the
            same five methods will do.

    Keyword Args:
        confirm: called with a yes/no question before anything
            irreversible; must return True to go ahead.  With no
            callback nothing irreversible ever happens.

    State changes are whole-value replacements made under a lock;
    network calls happen outside it, so fetches and a change in
    progress can overlap.  Whichever response is processed last wins.
    """

    def __init__(
        self,
        msgr: Any,
        *,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        self.msgr = msgr
        self.confirm = confirm
        self._lock = threading.Lock()
        self._roster: tuple[StudentRecord, ...] = ()
        self._history: tuple[UploadHistoryEntry, ...] = ()
        self._draft: EditDraft | None = None
        self._status: StatusMessage | None = None
        # in-flight counts; overlapping refreshes each hold one
        self._roster_fetches = 0
        self._history_fetches = 0
        self._mutating = False
        self._listeners: list[Callable[[RosterController], None]] = []

    # === read-only views of the state ===

    @property
    def roster(self) -> tuple[StudentRecord, ...]:
        return self._roster

    @property
    def history(self) -> tuple[UploadHistoryEntry, ...]:
        return self._history

    @property
    def draft(self) -> EditDraft | None:
        """A copy of the edit in progress, or None.

        Use :meth:`update_draft_field` to change it: editing the copy
        has no effect.
        """
        with self._lock:
            return self._draft.copy() if self._draft else None

    @property
    def is_editing(self) -> bool:
        return self._draft is not None

    @property
    def status(self) -> StatusMessage | None:
        return self._status

    @property
    def fetching_roster(self) -> bool:
        return self._roster_fetches > 0

    @property
    def fetching_history(self) -> bool:
        return self._history_fetches > 0

    @property
    def mutating(self) -> bool:
        return self._mutating

    def find(self, record_id: str) -> StudentRecord | None:
        """The record in the current snapshot with this id, if any."""
        for r in self._roster:
            if r.id == str(record_id):
                return r
        return None

    # === observers ===

    def add_listener(self, fn: Callable[[RosterController], None]) -> None:
        """Call ``fn(controller)`` after every change of state."""
        self._listeners.append(fn)

    def remove_listener(self, fn: Callable[[RosterController], None]) -> None:
        self._listeners.remove(fn)

    def _notify(self) -> None:
        # a broken view must not wedge the busy flags
        for fn in list(self._listeners):
            try:
                fn(self)
            except Exception:
                log.exception("Listener %r failed", fn)

    def _set_status(self, msg: StatusMessage | None) -> None:
        with self._lock:
            self._status = msg
        self._notify()

    # === fetching ===

    def activate(self) -> None:
        """Fetch roster and history at the same time, and wait for both.

        The two fetches run in their own threads and neither cares how
        the other fared.
        """
        threads = [
            threading.Thread(target=self.refresh_roster, name="roster-fetch"),
            threading.Thread(target=self.refresh_history, name="history-fetch"),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    def refresh_roster(self, *, clear_status: bool = True) -> bool:
        """Replace the local roster with whatever the server has now.

        Keyword Args:
            clear_status: blank the status message before fetching.
                Refreshes that follow a change pass False so the
                change's own message survives a non-empty result.

        Returns:
            True if the fetch succeeded (even if empty), else False.
        """
        with self._lock:
            self._roster_fetches += 1
            if clear_status:
                self._status = None
        self._notify()
        try:
            try:
                students = self.msgr.get_students()
            except GradeException as e:
                log.error("Fetch error: %s", e)
                self._set_status(StatusMessage.error(MSG_CONNECT_FAILED))
                return False
            with self._lock:
                self._roster = tuple(students)
                if not students:
                    self._status = StatusMessage.info(MSG_NO_STUDENTS)
            log.info("Fetched %d student records", len(students))
            return True
        finally:
            with self._lock:
                self._roster_fetches -= 1
            self._notify()

    def refresh_history(self) -> bool:
        """Replace the local upload history with the server's.

        Failures are only logged: the history is a nice-to-have and
        must not disturb the roster or its message.

        Returns:
            True if the fetch succeeded, else False.
        """
        with self._lock:
            self._history_fetches += 1
        self._notify()
        try:
            try:
                entries = self.msgr.get_upload_history()
            except GradeException as e:
                log.error("Fetch history error: %s", e)
                return False
            with self._lock:
                self._history = tuple(entries)
            log.info("Fetched %d upload history entries", len(entries))
            return True
        finally:
            with self._lock:
                self._history_fetches -= 1
            self._notify()

    # === changes ===

    def _begin_mutation(self, what: str) -> bool:
        with self._lock:
            if self._mutating:
                log.warning("Ignoring %s: another change is still in progress", what)
                return False
            self._mutating = True
        self._notify()
        return True

    def _end_mutation(self) -> None:
        with self._lock:
            self._mutating = False
        self._notify()

    def submit_upload(self, f: Path | str | None) -> bool:
        """Upload a spreadsheet or CSV file, then re-fetch everything.

        Args:
            f: the file chosen by the user; None or empty does nothing.

        Returns:
            True if the server accepted the file.
        """
        if not f:
            return False
        if not self._begin_mutation("upload"):
            return False
        try:
            self._set_status(None)
            try:
                count = self.msgr.upload_student_file(f)
            except (GradeException, OSError) as e:
                log.error("Upload error: %s", e)
                self._set_status(StatusMessage.error(MSG_UPLOAD_FAILED))
                return False
            log.info('Uploaded "%s": server imported %d students', f, count)
            self._set_status(StatusMessage.success(f"Success! Uploaded {count} students"))
            self.refresh_roster(clear_status=False)
            self.refresh_history()
            return True
        finally:
            self._end_mutation()

    def begin_edit(self, record: StudentRecord) -> None:
        """Start editing a copy of ``record``, abandoning any other edit."""
        with self._lock:
            if self._draft is not None:
                log.debug("Discarding unsaved edit of %s", self._draft.id)
            self._draft = EditDraft.from_record(record)
        self._notify()

    def update_draft_field(self, name: str, value: Any) -> None:
        """Change one field of the edit in progress; nothing is sent.

        Numeric input that does not parse is kept aside and blocks
        saving until corrected; see :class:`gradesync.records.EditDraft`.

        Raises:
            ValueError: nothing is being edited.
            KeyError: the field cannot be edited.
        """
        with self._lock:
            if self._draft is None:
                raise ValueError("No edit in progress")
            self._draft.update_field(name, value)
        self._notify()

    def cancel_edit(self) -> None:
        """Throw away the edit in progress, if any."""
        with self._lock:
            self._draft = None
        self._notify()

    def commit_edit(self) -> bool:
        """Send the whole draft to the server.

        On success the draft is gone and the roster re-fetched.  On
        failure the draft stays exactly as it was so no typing is lost,
        and the roster is left alone.

        Returns:
            True if the server accepted the update.

        Raises:
            ValueError: nothing is being edited.
        """
        with self._lock:
            if self._draft is None:
                raise ValueError("No edit in progress")
            draft = self._draft.copy()
        if not draft.is_valid:
            self._set_status(StatusMessage.error("; ".join(draft.problems())))
            return False
        if not self._begin_mutation("update"):
            return False
        try:
            try:
                self.msgr.update_student(draft)
            except GradeException as e:
                log.error("Update error: %s", e)
                self._set_status(StatusMessage.error(MSG_UPDATE_FAILED))
                return False
            log.info("Updated student record %s", draft.id)
            with self._lock:
                self._draft = None
                self._status = StatusMessage.success(MSG_UPDATED)
            self._notify()
            self.refresh_roster(clear_status=False)
            return True
        finally:
            self._end_mutation()

    def delete_record(
        self,
        record_id: str,
        *,
        confirm: Callable[[str], bool] | None = None,
    ) -> bool:
        """Delete a record from the server, once the user has said yes.

        Args:
            record_id: the server's id for the record.

        Keyword Args:
            confirm: overrides the controller's confirmation callback
                for this call.

        Returns:
            True if the server deleted it.  False if the user said no,
            or the delete failed.  The local roster is never edited
            directly: it changes only by the re-fetch.
        """
        ask = confirm or self.confirm
        if ask is None or not ask(CONFIRM_DELETE):
            log.debug("Delete of %s not confirmed", record_id)
            return False
        if not self._begin_mutation("delete"):
            return False
        try:
            try:
                self.msgr.delete_student(record_id)
            except GradeException as e:
                log.error("Delete error: %s", e)
                self._set_status(StatusMessage.error(MSG_DELETE_FAILED))
                return False
            log.info("Deleted student record %s", record_id)
            self._set_status(StatusMessage.success(MSG_DELETED))
            self.refresh_roster(clear_status=False)
            return True
        finally:
            self._end_mutation()
