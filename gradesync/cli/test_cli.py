# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2026 The gradesync developers

from unittest.mock import MagicMock

from pytest import raises

from gradesync.cli import (
    confirm_action,
    delete_student,
    edit_student,
    list_students,
    upload_file,
)
from gradesync.cli.__main__ import get_parser, main
from gradesync.config import default_config
from gradesync.controller import RosterController
from gradesync.grade_exceptions import GradeConnectionError
from gradesync.records import StudentRecord


def _ctrl(students=()) -> RosterController:
    msgr = MagicMock()
    msgr.get_students.return_value = list(students)
    msgr.get_upload_history.return_value = []
    msgr.upload_student_file.return_value = len(students)
    return RosterController(msgr)


REC = StudentRecord(
    id="r1",
    student_id="S1",
    student_name="Ada",
    total_marks=100,
    marks_obtained=50,
    percentage=50,
)


def test_parser_subcommands() -> None:
    p = get_parser()
    args = p.parse_args(["delete", "r1", "--yes", "-s", "localhost:5000"])
    assert args.command == "delete"
    assert args.yes
    assert args.server == "localhost:5000"
    args = p.parse_args(["edit", "r1", "--total", "80"])
    assert args.total == "80"
    assert args.name is None


def test_parser_version() -> None:
    with raises(SystemExit):
        get_parser().parse_args(["--version"])


def test_list_students(capsys) -> None:
    assert list_students(ctrl=_ctrl([REC]))
    out = capsys.readouterr().out
    assert "Ada" in out


def test_list_students_server_down(capsys) -> None:
    ctrl = _ctrl()
    ctrl.msgr.get_students.side_effect = GradeConnectionError("down")
    assert not list_students(ctrl=ctrl)
    assert "Error" in capsys.readouterr().out


def test_upload(tmp_path, capsys) -> None:
    ctrl = _ctrl([REC])
    assert upload_file(tmp_path / "m.csv", ctrl=ctrl)
    assert "Uploaded 1 students" in capsys.readouterr().out


def test_edit_student() -> None:
    ctrl = _ctrl([REC])
    assert edit_student("r1", total="80", ctrl=ctrl)
    sent = ctrl.msgr.update_student.call_args[0][0]
    assert sent.total_marks == 80
    assert sent.student_name == "Ada"


def test_edit_student_bad_number(capsys) -> None:
    ctrl = _ctrl([REC])
    assert not edit_student("r1", obtained="fifty", ctrl=ctrl)
    ctrl.msgr.update_student.assert_not_called()
    assert not ctrl.is_editing
    assert "Marks obtained" in capsys.readouterr().out


def test_edit_unknown_record(capsys) -> None:
    assert not edit_student("nope", name="x", ctrl=_ctrl([REC]))
    assert "no student record" in capsys.readouterr().out


def test_delete_with_yes() -> None:
    ctrl = _ctrl([REC])
    assert delete_student("r1", yes=True, ctrl=ctrl)
    ctrl.msgr.delete_student.assert_called_once_with("r1")


def test_delete_answer_no(monkeypatch, capsys) -> None:
    ctrl = _ctrl([REC])
    ctrl.confirm = confirm_action
    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    assert not delete_student("r1", ctrl=ctrl)
    ctrl.msgr.delete_student.assert_not_called()
    assert "Not deleted" in capsys.readouterr().out


def test_confirm_action(monkeypatch) -> None:
    monkeypatch.setattr("builtins.input", lambda prompt: " Yes ")
    assert confirm_action("Sure?")
    monkeypatch.setattr("builtins.input", lambda prompt: "")
    assert not confirm_action("Sure?")

    def eof(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    assert not confirm_action("Sure?")


def test_with_controller_builds_and_stops(monkeypatch) -> None:
    made = []

    def fake_start(server, timeout=None):
        c = _ctrl([REC])
        made.append((server, timeout, c))
        return c

    monkeypatch.setattr("gradesync.cli.controller_setup.start_controller", fake_start)
    assert list_students(ctrl=("http://x:5000", (1, 2)))
    ((server, timeout, c),) = made
    assert server == "http://x:5000"
    assert timeout == (1, 2)
    c.msgr.stop.assert_called_once()


def test_main_bad_server_exits_with_error(monkeypatch, capsys) -> None:
    def fake_start(server, timeout=None):
        raise GradeConnectionError(f'Cannot parse the URL "{server}"')

    monkeypatch.setattr("gradesync.cli.controller_setup.start_controller", fake_start)
    monkeypatch.setattr("gradesync.cli.__main__.read_config", default_config)
    monkeypatch.setattr(
        "gradesync.cli.__main__.configure_logging", lambda cfg, level=None: None
    )
    monkeypatch.setattr("sys.argv", ["gradesync-cli", "list", "-s", "http://[oops"])
    with raises(SystemExit) as e:
        main()
    assert e.value.code == 1
    assert "Cannot parse the URL" in capsys.readouterr().err
