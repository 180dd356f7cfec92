# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Command-line tools for looking after the roster on a grade server."""

__copyright__ = "Copyright (C) 2026 The gradesync developers"
__credits__ = "The gradesync developers"
__license__ = "AGPL-3.0-or-later"


from gradesync import __version__

from .controller_setup import with_controller, start_controller, confirm_action
from .roster_tools import (
    list_students,
    show_history,
    upload_file,
    edit_student,
    delete_student,
)

# what you get from "from gradesync.cli import *"
__all__ = [
    "list_students",
    "show_history",
    "upload_file",
    "edit_student",
    "delete_student",
]
