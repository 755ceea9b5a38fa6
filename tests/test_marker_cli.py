"""Tests for the segmark command-line tool."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from segmark.scripts import marker_cli


@pytest.fixture(autouse=True)
def _isolate(monkeypatch: pytest.MonkeyPatch) -> list[dict]:
    for name in ("SEGMARK_LOG_LEVEL", "SEGMARK_LOG_DIR", "SEGMARK_LOG_TO_FILE", "SEGMARK_STRICT"):
        monkeypatch.delenv(name, raising=False)
    calls: list[dict] = []

    def _fake_setup(level, **kwargs):
        calls.append({"level": level, **kwargs})
        return None

    monkeypatch.setattr(marker_cli, "setup_logging", _fake_setup)
    return calls


def test_compare_prints_sign(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["compare", "1:5", "2:0"]) == 0
    assert int(capsys.readouterr().out.strip()) < 0


def test_compare_equal_markers(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["compare", "3:4", "3:4"]) == 0
    assert capsys.readouterr().out.strip() == "0"


def test_diff_with_line_table(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["diff", "--lines", "10,8,12", "0:2", "2:3"]) == 0
    assert capsys.readouterr().out.strip() == "21"


def test_diff_backwards_as_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["--json", "diff", "--lines", "10,8,12", "2:3", "0:2"]) == 0
    assert json.loads(capsys.readouterr().out) == {"result": -21}


def test_shift_across_line_boundary(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["shift", "--lines", "5,5", "0:3", "4"]) == 0
    assert capsys.readouterr().out.strip() == "1:1"


def test_shift_accepts_negative_offsets(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["shift", "--lines", "5,5", "1:1", "-4"]) == 0
    assert capsys.readouterr().out.strip() == "0:3"


def test_shift_reports_out_of_bounds(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["--json", "shift", "--lines", "5,5", "1:4", "10"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload == {"result": {"line": 1, "column": 14}, "out_of_bounds": True}


def test_shift_plain_output_flags_out_of_bounds(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["shift", "--lines", "5,5", "0:1", "-3"]) == 0
    assert capsys.readouterr().out.strip() == "0:-2 (out of bounds)"


def test_line_table_from_text_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "doc.txt"
    source.write_bytes(b"hello\r\nworld!\nend")

    assert marker_cli.main(["diff", "--text-file", str(source), "0:0", "2:3"]) == 0
    assert capsys.readouterr().out.strip() == "16"


def test_missing_text_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "missing.txt"

    assert marker_cli.main(["diff", "--text-file", str(missing), "0:0", "0:1"]) == 2
    assert "cannot read" in capsys.readouterr().err


def test_strict_rejects_invalid_marker(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["--strict", "shift", "--lines", "5,5", "3:0", "1"]) == 1
    assert "outside the document" in capsys.readouterr().err


def test_strict_from_environment(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("SEGMARK_STRICT", "on")

    assert marker_cli.main(["diff", "--lines", "5,5", "0:0", "1:9"]) == 1
    assert "length 5" in capsys.readouterr().err


def test_lenient_mode_computes_with_unchecked_markers(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["diff", "--lines", "5,5", "0:0", "1:9"]) == 0
    assert capsys.readouterr().out.strip() == "15"


@pytest.mark.parametrize(
    "argv",
    [
        ["compare", "1-5", "2:0"],
        ["diff", "--lines", "5,x", "0:0", "0:1"],
        ["diff", "--lines", "5,-1", "0:0", "0:1"],
        ["shift", "0:0", "1"],
        ["shift", "--lines", "5", "0:0", "one"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as info:
        marker_cli.main(argv)

    assert info.value.code == 2
    assert "error" in capsys.readouterr().err


def test_unknown_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    assert marker_cli.main(["--log-level", "chatty", "compare", "0:0", "0:0"]) == 2
    assert "Unknown log level" in capsys.readouterr().err


def test_logging_options_reach_setup(_isolate: list[dict], tmp_path: Path) -> None:
    assert marker_cli.main(["--log-level", "debug", "--log-file", "--log-dir", str(tmp_path), "compare", "0:0", "0:1"]) == 0

    assert _isolate == [{"level": 10, "log_dir": tmp_path, "log_to_file": True}]


@pytest.mark.parametrize(
    "argv",
    [
        ["diff", "--lines", "5", "0:0", "3:0"],
        ["diff", "--lines", "5,5", "2:0", "0:0"],
        ["shift", "--lines", "5,5", "4:0", "-1"],
    ],
)
def test_lenient_mode_still_rejects_lines_outside_the_table(
    argv: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    assert marker_cli.main(argv) == 1
    captured = capsys.readouterr()

    assert captured.out == ""
    assert "outside the document" in captured.err


def test_text_file_that_is_not_utf8(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "binary.txt"
    source.write_bytes(b"ab\xff\ncd")

    assert marker_cli.main(["diff", "--text-file", str(source), "0:0", "1:1"]) == 2
    assert "cannot read" in capsys.readouterr().err
