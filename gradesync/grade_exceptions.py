# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Exceptions for gradesync.

Serious exceptions are for unexpected replies from the grade server
that we cannot sanely interpret.  Benign are for signaling expected
(or at least not unexpected) situations, such as the server being
down or a record having been deleted by someone else.
"""


class GradeException(Exception):
    """Catch-all parent of all gradesync exceptions."""

    pass


class GradeSeriousException(GradeException):
    """Serious or unexpected problems, such as an unknown error status."""

    pass


class GradeBenignException(GradeException):
    """A not-unexpected situation, often signaling an error condition."""

    pass


class GradeAPIException(GradeBenignException):
    """The server replied, but not with something we understand."""

    pass


class GradeConnectionError(GradeBenignException):
    """The server could not be reached, or its URL makes no sense."""

    pass


class GradeTimeoutError(GradeConnectionError):
    """The server took too long to connect or to answer."""

    pass


class GradeNoStudent(GradeBenignException):
    """The server has no student record with that id."""

    def __init__(self, msg=None):
        if not msg:
            msg = "No such student record on the server."
        super().__init__(msg)


class GradeUploadRejected(GradeBenignException):
    """The server refused to import the uploaded file."""

    pass

