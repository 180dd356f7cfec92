# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Backend bits 'n bobs to talk to a grade server."""

from __future__ import annotations

from contextlib import contextmanager
import logging
import mimetypes
from pathlib import Path
import threading
from typing import Any, Iterator
from urllib.parse import quote

import requests
from requests_toolbelt import MultipartEncoder
import urllib3

from gradesync import Default_API_URL, Default_Port
from gradesync.grade_exceptions import (
    GradeAPIException,
    GradeConnectionError,
    GradeNoStudent,
    GradeSeriousException,
    GradeTimeoutError,
    GradeUploadRejected,
)
from gradesync.records import EditDraft, StudentRecord, UploadHistoryEntry

__all__ = ["Messenger"]

log = logging.getLogger("messenger")
# requests_log = logging.getLogger("urllib3")
# requests_log.setLevel(logging.DEBUG)
# requests_log.propagate = True


def _reason(response: requests.Response) -> str:
    """Best description of why the server said no: its text if any, else the reason phrase."""
    text = (response.text or "").strip()
    return text if text else str(response.reason)


@contextmanager
def _network_errors() -> Iterator[None]:
    """Translate transport-level failures from requests into our exceptions."""
    try:
        yield
    except requests.Timeout as err:
        raise GradeTimeoutError(f"Server took too long to respond: {err}") from None
    except requests.ConnectionError as err:
        raise GradeConnectionError(err) from None
    except requests.exceptions.InvalidURL as err:
        raise GradeConnectionError(f"Invalid URL: {err}") from None
    except requests.RequestException as err:
        raise GradeSeriousException(f"Some other sort of error {err}") from None


class Messenger:
    """Communication with a grade server.

    One method per endpoint of the server's API.  Each either returns
    the decoded reply or raises a subclass of
    :class:`gradesync.grade_exceptions.GradeException`: callers never
    see exceptions from `requests` itself.

    Instance Variables:
        session (requests.Session/None): open between :meth:`start`
            and :meth:`stop`.
        default_timeout (tuple): ``(connect, read)`` seconds, passed
            to every request that does not give its own.
    """

    def __init__(
        self,
        server: str | None = None,
        *,
        port: int | None = None,
        scheme: str | None = None,
        timeout: tuple[float, float] | None = None,
    ) -> None:
        """Initialize a new Messenger.

        Args:
            server: URL or None to default to ``http://localhost:5000``.

        Keyword Arguments:
            port: What port to try to connect to.  Only used when
                ``server`` is a bare host name: a full URL is taken as-is.
                Defaults to 5000.
            scheme: What scheme to use if the ``server`` string has none.
                Defaults to ``"http"``.
            timeout: ``(connect, read)`` timeouts in seconds.

        Raises:
            GradeConnectionError: cannot make sense of the URL.
        """
        if not server:
            server = Default_API_URL

        # e.g., trailing whitespace pasted from somewhere
        server = server.strip().rstrip("/")

        try:
            parsed_url = urllib3.util.parse_url(server)
        except urllib3.exceptions.LocationParseError as e:
            raise GradeConnectionError(f'Cannot parse the URL "{server}"') from e

        if scheme is None:
            scheme = "http"

        if not parsed_url.host:
            # "localhost:5000" parses this way: we do it ourselves
            self._raw_init(f"{scheme}://{server}", timeout=timeout)
            return

        if not parsed_url.scheme:
            server = f"{scheme}://{server}"
            if not parsed_url.port:
                server = f"{server}:{port or Default_Port}"

        self._raw_init(server, timeout=timeout)

    def _raw_init(self, base: str, *, timeout: tuple[float, float] | None) -> None:
        self.session: requests.Session | None = None
        self.default_timeout = timeout or (10, 60)
        try:
            parsed_url = urllib3.util.parse_url(base)
        except urllib3.exceptions.LocationParseError as e:
            raise GradeConnectionError(f'Cannot parse the URL "{base}"') from e
        if not parsed_url.host:
            raise GradeConnectionError(f'No host in the URL "{base}"')
        self.scheme = parsed_url.scheme
        self.base = base
        self.SRmutex = threading.Lock()

    @property
    def server(self) -> str:
        return self.base

    def start(self) -> None:
        """Start the messenger session."""
        if self.session:
            log.debug("already have an requests-session")
            return
        log.debug("starting a new requests-session to %s", self.base)
        self.session = requests.Session()

    def stop(self) -> None:
        """Stop the messenger."""
        if self.session:
            log.debug("stopping requests-session")
            self.session.close()
            self.session = None

    def is_started(self) -> bool:
        return bool(self.session)

    def get(self, url: str, *args, **kwargs) -> requests.Response:
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.default_timeout
        assert self.session, "messenger not started"
        return self.session.get(self.base + url, *args, **kwargs)

    def post(self, url: str, *args, **kwargs) -> requests.Response:
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.default_timeout
        assert self.session, "messenger not started"
        return self.session.post(self.base + url, *args, **kwargs)

    def put(self, url: str, *args, **kwargs) -> requests.Response:
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.default_timeout
        assert self.session, "messenger not started"
        return self.session.put(self.base + url, *args, **kwargs)

    def delete(self, url: str, *args, **kwargs) -> requests.Response:
        if "timeout" not in kwargs:
            kwargs["timeout"] = self.default_timeout
        assert self.session, "messenger not started"
        return self.session.delete(self.base + url, *args, **kwargs)

    # ------------------------
    # Roster

    def get_students(self) -> list[StudentRecord]:
        """Get every student record held by the server.

        Returns:
            A list of records in the order the server sent them,
            possibly empty.

        Raises:
            GradeConnectionError: cannot reach the server.
            GradeTimeoutError: server did not answer in time.
            GradeAPIException: the reply is not a list of records.
            GradeSeriousException: any other error status.
        """
        with self.SRmutex, _network_errors():
            try:
                response = self.get("/api/students")
                response.raise_for_status()
            except requests.HTTPError as e:
                raise GradeSeriousException(
                    f"Error getting student list: {e}"
                ) from None
            rows = self._json_list(response, "student list")
        try:
            return [StudentRecord.from_dict(r) for r in rows]
        except (TypeError, ValueError) as e:
            raise GradeAPIException(f"Malformed student record: {e}") from None

    def get_upload_history(self) -> list[UploadHistoryEntry]:
        """Get the server's log of past uploads, in the server's order.

        Raises:
            Same as :meth:`get_students`.
        """
        with self.SRmutex, _network_errors():
            try:
                response = self.get("/api/upload-history")
                response.raise_for_status()
            except requests.HTTPError as e:
                raise GradeSeriousException(
                    f"Error getting upload history: {e}"
                ) from None
            rows = self._json_list(response, "upload history")
        try:
            return [UploadHistoryEntry.from_dict(r) for r in rows]
        except (TypeError, ValueError) as e:
            raise GradeAPIException(f"Malformed upload history entry: {e}") from None

    def upload_student_file(self, f: Path | str) -> int:
        """Send a spreadsheet or CSV file of student records to the server.

        The file goes up as multipart form data in a field called
        ``file``; the server does all the parsing.

        Args:
            f: path to the ``.xlsx`` or ``.csv`` file.  The filename is
                uploaded too.

        Returns:
            How many student records the server says it imported.

        Raises:
            FileNotFoundError: no such file; other OSError on reading it.
            GradeUploadRejected: the server refused the file.
            GradeConnectionError: cannot reach the server.
            GradeTimeoutError: server did not answer in time.
            GradeAPIException: the reply has no usable count.
            GradeSeriousException: any other error status.
        """
        f = Path(f)
        mime_type = mimetypes.guess_type(f.name)[0] or "application/octet-stream"
        # parsing a big spreadsheet can be slow: be more patient than usual
        timeout = (self.default_timeout[0], 3 * self.default_timeout[1])
        with self.SRmutex, _network_errors():
            try:
                with open(f, "rb") as fh:
                    dat = MultipartEncoder(fields={"file": (f.name, fh, mime_type)})
                    response = self.post(
                        "/api/upload",
                        data=dat,
                        headers={"Content-Type": dat.content_type},
                        timeout=timeout,
                    )
                response.raise_for_status()
            except requests.HTTPError as e:
                if response.status_code in (400, 413, 415, 422):
                    raise GradeUploadRejected(
                        f'Server rejected "{f.name}": {_reason(response)}'
                    ) from None
                raise GradeSeriousException(f"Upload failed: error {e}") from None
            reply = self._json(response, "upload")
        try:
            return int(reply["count"])
        except (KeyError, TypeError, ValueError):
            raise GradeAPIException(f"Upload reply has no count: {reply!r}") from None

    def update_student(self, record: StudentRecord | EditDraft) -> StudentRecord | None:
        """Replace all the fields of one student record on the server.

        Args:
            record: the new values; its ``id`` says which record.

        Returns:
            The updated record if the server sends one back, else None.

        Raises:
            GradeNoStudent: the server has no record with that id.
            GradeAPIException: the server refused the values (400), or
                replied with something that is not JSON.
            GradeConnectionError: cannot reach the server.
            GradeTimeoutError: server did not answer in time.
            GradeSeriousException: any other error status.
        """
        url = f"/api/students/{quote(str(record.id), safe='')}"
        with self.SRmutex, _network_errors():
            try:
                response = self.put(url, json=record.to_payload())
                response.raise_for_status()
            except requests.HTTPError as e:
                if response.status_code == 404:
                    raise GradeNoStudent(
                        f"No student with id {record.id}: {_reason(response)}"
                    ) from None
                if response.status_code == 400:
                    raise GradeAPIException(
                        f"Server refused update: {_reason(response)}"
                    ) from None
                raise GradeSeriousException(f"Update failed: error {e}") from None
            if not response.content:
                return None
            reply = self._json(response, "update")
        if isinstance(reply, dict) and ("_id" in reply or "id" in reply):
            try:
                return StudentRecord.from_dict(reply)
            except (TypeError, ValueError) as e:
                raise GradeAPIException(f"Malformed student record: {e}") from None
        return None

    def delete_student(self, record_id: str) -> None:
        """Delete one student record from the server.

        Raises:
            GradeNoStudent: the server has no record with that id.
            GradeConnectionError: cannot reach the server.
            GradeTimeoutError: server did not answer in time.
            GradeSeriousException: any other error status.
        """
        url = f"/api/students/{quote(str(record_id), safe='')}"
        with self.SRmutex, _network_errors():
            try:
                response = self.delete(url)
                response.raise_for_status()
            except requests.HTTPError as e:
                if response.status_code == 404:
                    raise GradeNoStudent(
                        f"No student with id {record_id}: {_reason(response)}"
                    ) from None
                raise GradeSeriousException(f"Delete failed: error {e}") from None

    # ------------------------
    # Decoding helpers

    @staticmethod
    def _json(response: requests.Response, what: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise GradeAPIException(f"Server sent invalid JSON for {what}: {e}") from None

    @classmethod
    def _json_list(cls, response: requests.Response, what: str) -> list[Any]:
        rows = cls._json(response, what)
        if not isinstance(rows, list):
            raise GradeAPIException(
                f"Expected a list for {what}, got {type(rows).__name__}"
            )
        return rows
