#!/usr/bin/env python3

# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

"""Look after the student roster held by a grade server.

Upload spreadsheets of marks, list the students, fix or delete
individual records and see what has been uploaded before.

Every subcommand talks to a server, which can be specified on the
command line with --server; otherwise the environment variable
GRADESYNC_API_URL is used, then the "server" setting of the config
file, then http://localhost:5000.
"""

__copyright__ = "Copyright (C) 2026 The gradesync developers"
__credits__ = "The gradesync developers"
__license__ = "AGPL-3.0-or-later"

import argparse
from pathlib import Path
import sys

from gradesync import __version__
from gradesync.config import (
    SERVER_ENV_VAR,
    cfgfile,
    configure_logging,
    read_config,
    save_config,
    timeout_from_config,
)
from gradesync.cli import (
    delete_student,
    edit_student,
    list_students,
    show_history,
    upload_file,
)
from gradesync.grade_exceptions import GradeException


def get_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description=__doc__.split("\n")[0],
        epilog="\n".join(__doc__.split("\n")[1:]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="How much to log (default from the config file, else warning).",
    )
    sub = parser.add_subparsers(dest="command")

    def _add_server_args(x):
        x.add_argument(
            "-s",
            "--server",
            metavar="URL",
            action="store",
            help=f"""
                URL of the grade server, e.g., http://localhost:5000.
                A bare host name gets http and port 5000.
                The environment variable {SERVER_ENV_VAR} will be used
                if --server is not given.
            """,
        )

    s = sub.add_parser(
        "list",
        help="List the students on the server.",
        description="Fetch and show every student record held by the server.",
    )
    _add_server_args(s)

    s = sub.add_parser(
        "history",
        help="Show the upload history.",
        description="Show the server's log of past file uploads.",
    )
    _add_server_args(s)

    s = sub.add_parser(
        "upload",
        help="Upload an Excel or CSV file of students.",
        description="""
            Upload a spreadsheet (.xlsx) or CSV (.csv) file of student
            marks.  The server does the parsing; the roster is fetched
            again afterwards and shown.
        """,
    )
    s.add_argument("file", help="an .xlsx or .csv file.")
    _add_server_args(s)

    s = sub.add_parser(
        "edit",
        help="Change the name or marks of a student.",
        description="""
            Change a student record.  Fields not given are left alone.
            The percentage is computed by the server.
        """,
    )
    s.add_argument("record_id", help='The record id, as shown by "list".')
    s.add_argument("--name", help="New student name.")
    s.add_argument("--total", metavar="MARKS", help="New total marks.")
    s.add_argument("--obtained", metavar="MARKS", help="New marks obtained.")
    _add_server_args(s)

    s = sub.add_parser(
        "delete",
        help="Delete a student.",
        description="Delete a student record.  This cannot be undone.",
    )
    s.add_argument("record_id", help='The record id, as shown by "list".')
    s.add_argument(
        "-y", "--yes", action="store_true", help="Do not ask for confirmation."
    )
    _add_server_args(s)

    s = sub.add_parser(
        "config",
        help="Show the settings in use.",
        description=f"""
            Show the effective settings and where the config file lives
            ({cfgfile}).
        """,
    )
    _add_server_args(s)
    s.add_argument(
        "--save",
        action="store_true",
        help="Write the settings (including any --server) to the config file.",
    )
    return parser


def main() -> None:
    """The gradesync-cli command line tool."""
    parser = get_parser()
    args = parser.parse_args()

    try:
        cfg = read_config()
    except ValueError as e:
        print(e, file=sys.stderr)
        sys.exit(2)
    configure_logging(cfg, level=args.log_level)

    if getattr(args, "server", None):
        cfg["server"] = args.server

    m = (cfg["server"], timeout_from_config(cfg))

    try:
        ok = _dispatch(parser, args, cfg, m)
    except GradeException as e:
        print(f"Error: {e}", file=sys.stderr)
        ok = False

    sys.exit(0 if ok else 1)


def _dispatch(parser, args, cfg, m) -> bool:
    if args.command == "list":
        ok = list_students(ctrl=m)
    elif args.command == "history":
        ok = show_history(ctrl=m)
    elif args.command == "upload":
        ok = upload_file(Path(args.file), ctrl=m)
    elif args.command == "edit":
        ok = edit_student(
            args.record_id,
            name=args.name,
            total=args.total,
            obtained=args.obtained,
            ctrl=m,
        )
    elif args.command == "delete":
        ok = delete_student(args.record_id, yes=args.yes, ctrl=m)
    elif args.command == "config":
        for k, v in cfg.items():
            print(f"{k} = {v}")
        if args.save:
            print(f"Saved to {save_config(cfg)}")
        ok = True
    else:
        parser.print_help()
        ok = True
    return ok


if __name__ == "__main__":
    main()
