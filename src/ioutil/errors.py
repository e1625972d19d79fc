"""Error hierarchy for console parsing and stream decoration."""

from __future__ import annotations


class IoUtilError(Exception):
    """Base exception for all ioutil operations."""


class ParseError(IoUtilError, ValueError):
    """Raised when a console line is missing or is not a valid numeric literal."""


class InvalidArgumentError(IoUtilError, ValueError):
    """Raised for empty character input and for missing streams passed to a decorator."""
