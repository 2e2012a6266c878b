import pytest

from main import main, parse_args, run_console


def test_parse_args_defaults():
    args = parse_args([])
    assert not args.gui
    assert args.max_steps is None
    assert args.drop_faculty is None


def test_console_run_prints_every_division(capsys):
    assert run_console(parse_args([])) == 0
    out = capsys.readouterr().out
    for division in "ABCD":
        assert f"Timetable for Division {division}" in out


def test_console_run_without_cn_faculty_fails(capsys):
    assert run_console(parse_args(["--drop-faculty", "CN"])) == 1
    assert "No valid timetable found." in capsys.readouterr().out


def test_invalid_budget_exits_with_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["--max-steps", "0"])
    assert exc.value.code == 2


def test_console_run_without_pinned_subject_faculty_still_solves(capsys):
    assert run_console(parse_args(["--drop-faculty", "BIDA"])) == 0
    assert "Timetable for Division A" in capsys.readouterr().out
