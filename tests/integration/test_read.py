"""Integration tests: ioutil read <type> (stdin parsing, error exits)."""

from __future__ import annotations

import io

import pytest

from ioutil.commands.read_cmd import run as read_run


def _run(monkeypatch: pytest.MonkeyPatch, type_: str, stdin_text: str) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin_text))
    read_run(type("Args", (), {"type": type_})())


@pytest.mark.parametrize(
    "type_, stdin_text, expected",
    [
        ("int", "42\n", "42"),
        ("float", "3.14\n", "3.14"),
        ("double", "-2.5\n", "-2.5"),
        ("char", "xyz\n", "x"),
        ("string", "hello world\n", "hello world"),
        ("string", "\n", ""),
    ],
)
def test_read_prints_value(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], type_: str, stdin_text: str, expected: str
) -> None:
    _run(monkeypatch, type_, stdin_text)
    assert capsys.readouterr().out == expected + "\n"


@pytest.mark.parametrize(
    "type_, stdin_text",
    [("int", "abc\n"), ("int", ""), ("double", "abc\n"), ("char", "\n"), ("string", "")],
)
def test_read_invalid_input_exits_1(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], type_: str, stdin_text: str
) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, type_, stdin_text)
    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error:")
