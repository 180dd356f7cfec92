# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""gradesync keeps a local roster of student grades in step with a grade server.

The server stores student marks uploaded from spreadsheets; gradesync
fetches the roster and upload history, and edits or deletes records,
always re-fetching after a change rather than guessing what the server
did.
"""

__copyright__ = "Copyright (C) 2026 The gradesync developers"
__credits__ = "The gradesync developers"
__license__ = "AGPL-3.0-or-later"

from .version import __version__

Default_API_URL = "http://localhost:5000"
Default_Port = 5000

from .records import StudentRecord, UploadHistoryEntry, EditDraft
from .status import StatusMessage, StatusKind
from .messenger import Messenger
from .controller import RosterController

__all__ = [
    "StudentRecord",
    "UploadHistoryEntry",
    "EditDraft",
    "StatusMessage",
    "StatusKind",
    "Messenger",
    "RosterController",
]
