"""Integration tests: argument parsing, logging setup, and dispatch through main()."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from ioutil import __version__
from ioutil.cli import main, setup_logging


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_command_required(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2


def test_main_read_int(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("42\n"))
    main(["read", "int"])
    assert capsys.readouterr().out == "42\n"


def test_main_copy(tmp_path: Path) -> None:
    src = tmp_path / "a.bin"
    dst = tmp_path / "b.bin"
    src.write_bytes(b"abc" * 5000)
    main(["copy", str(src), str(dst), "--strategy", "buffered", "-q"])
    assert dst.read_bytes() == b"abc" * 5000


def test_main_copy_rejects_unknown_strategy(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["copy", "a", "b", "--strategy", "turbo"])
    assert exc_info.value.code == 2


@pytest.mark.parametrize(
    "argv, level",
    [
        (["-v", "read", "int"], logging.DEBUG),
        (["read", "int", "-v"], logging.DEBUG),
        (["-q", "read", "int"], logging.ERROR),
    ],
)
def test_log_flags_before_or_after_command(monkeypatch: pytest.MonkeyPatch, argv: list[str], level: int) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n"))
    main(argv)
    assert logging.getLogger("ioutil").level == level


def test_setup_logging_levels() -> None:
    setup_logging(verbose=True)
    assert logging.getLogger("ioutil").level == logging.DEBUG
    setup_logging(quiet=True)
    assert logging.getLogger("ioutil").level == logging.ERROR
    assert len(logging.getLogger("ioutil").handlers) == 1


def test_setup_logging_file_from_config(isolated_home: Path, tmp_path: Path) -> None:
    log_file = tmp_path / "ioutil.log"
    config_dir = isolated_home / ".ioutil"
    config_dir.mkdir()
    (config_dir / "config.json").write_text(
        json.dumps({"logging": {"level": "warning", "file": str(log_file)}}), encoding="utf-8"
    )
    setup_logging()
    root = logging.getLogger("ioutil")
    assert root.level == logging.WARNING
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
    root.warning("hello file")
    for h in root.handlers:
        h.flush()
    assert "hello file" in log_file.read_text(encoding="utf-8")
