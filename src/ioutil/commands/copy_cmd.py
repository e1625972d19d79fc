"""Copy a file (or stdin) to a file (or stdout) with a selectable strategy."""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from typing import IO, Callable

from ioutil.config import copy_strategy, load_config
from ioutil.streams import (
    copy_buffered,
    copy_bytewise,
    copy_chars_buffered,
    copy_chars_own_buffering,
    copy_charwise,
    copy_own_buffering,
    safe_close,
)

logger = logging.getLogger(__name__)

STDIO = "-"

_BYTE_COPIES: dict[str, Callable[[IO[bytes], IO[bytes]], None]] = {
    "bytewise": copy_bytewise,
    "buffered": copy_buffered,
    "own": copy_own_buffering,
}

_CHAR_COPIES: dict[str, Callable[[IO[str], IO[str]], None]] = {
    "bytewise": copy_charwise,
    "buffered": copy_chars_buffered,
    "own": copy_chars_own_buffering,
}


def _open_source(path: str, text: bool, encoding: str) -> tuple[IO, bool]:
    """Return (stream, owned). Files are opened unbuffered (binary) so the strategy decides buffering."""
    if path == STDIO:
        return (sys.stdin if text else sys.stdin.buffer), False
    if text:
        return open(path, "r", encoding=encoding, newline=""), True
    return open(path, "rb", buffering=0), True


def _open_sink(path: str, text: bool, encoding: str) -> tuple[IO, bool]:
    if path == STDIO:
        return (sys.stdout if text else sys.stdout.buffer), False
    if text:
        return open(path, "w", encoding=encoding, newline=""), True
    return open(path, "wb", buffering=0), True


def run(args: Namespace) -> None:
    """Run the copy command: pick the strategy, open both ends, copy, close what we opened."""
    config = load_config()
    strategy = getattr(args, "strategy", None) or copy_strategy(config)
    text = getattr(args, "text", False)
    encoding = getattr(args, "encoding", None) or (config.get("copy") or {}).get("encoding") or "utf-8"
    copy = (_CHAR_COPIES if text else _BYTE_COPIES)[strategy]

    source = sink = None
    owns_source = owns_sink = False
    try:
        source, owns_source = _open_source(args.source, text, encoding)
        sink, owns_sink = _open_sink(args.dest, text, encoding)
        logger.debug("Copying %s -> %s (strategy=%s, text=%s)", args.source, args.dest, strategy, text)
        copy(source, sink)
    except (OSError, UnicodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        if owns_source:
            safe_close(source)
        if owns_sink:
            safe_close(sink)
