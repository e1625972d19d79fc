"""Read one line from the console and parse it into a primitive value."""

from __future__ import annotations

import logging
import re
import sys
from typing import TextIO

from ioutil.errors import InvalidArgumentError, ParseError

logger = logging.getLogger(__name__)

# Signed 32-bit range accepted by get_integer
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")


def read_line(stream: TextIO | None = None) -> str | None:
    """
    Block until a full line (or end of input) is read from stream (default: stdin).

    Returns the line without its terminator, or None at end of input. A read
    failure (I/O error, closed stream, undecodable input) is logged as a warning
    and reported as None so callers see "no input" whether the stream was empty
    or unreadable.
    """
    source = sys.stdin if stream is None else stream
    try:
        line = source.readline()
    except (OSError, ValueError) as e:
        logger.warning("unable to read from input device!", exc_info=e)
        return None
    if not line:
        return None
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def get_integer(stream: TextIO | None = None) -> int:
    """Read a line and parse it as a base-10 signed 32-bit integer. Raises ParseError."""
    line = read_line(stream)
    if line is None or not _INTEGER_LITERAL.fullmatch(line):
        raise ParseError(f"invalid integer literal: {line!r}")
    number = int(line)
    if not INT_MIN <= number <= INT_MAX:
        raise ParseError(f"integer out of range: {line!r}")
    return number


def _parse_float(line: str | None) -> float:
    if line is None:
        raise ParseError("invalid floating-point literal: None")
    try:
        return float(line)
    except ValueError as e:
        raise ParseError(f"invalid floating-point literal: {line!r}") from e


def get_float(stream: TextIO | None = None) -> float:
    """Read a line and parse it as a float. Raises ParseError."""
    return _parse_float(read_line(stream))


def get_double(stream: TextIO | None = None) -> float:
    """Read a line and parse it as a double. Python has a single float type, so this matches get_float."""
    return _parse_float(read_line(stream))


def get_char(stream: TextIO | None = None) -> str:
    """Read a line and return its first character. Raises InvalidArgumentError if empty or missing."""
    line = read_line(stream)
    if not line:
        raise InvalidArgumentError(f"input value is not a character data type!: {line}")
    return line[0]


def get_string(stream: TextIO | None = None) -> str | None:
    """Read a line and return it unmodified; None at end of input."""
    return read_line(stream)
