"""Console input parsing and stream copy helpers."""

from __future__ import annotations

__version__ = "0.1.0"

from ioutil.errors import InvalidArgumentError, IoUtilError, ParseError

__all__ = [
    "InvalidArgumentError",
    "IoUtilError",
    "ParseError",
    "__version__",
]
