"""Read one typed value from stdin and print it."""

from __future__ import annotations

import sys
from argparse import Namespace

from ioutil.console import get_char, get_double, get_float, get_integer, get_string
from ioutil.errors import IoUtilError

_READERS = {
    "int": get_integer,
    "float": get_float,
    "double": get_double,
    "char": get_char,
    "string": get_string,
}


def run(args: Namespace) -> None:
    """Run the read command: parse one line of stdin as args.type; exit 1 on invalid or missing input."""
    reader = _READERS[args.type]
    try:
        value = reader(sys.stdin)
    except IoUtilError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if value is None:
        print("Error: no input available.", file=sys.stderr)
        sys.exit(1)
    print(value)
