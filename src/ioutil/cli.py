"""CLI entry point: argument parsing and subcommand dispatch."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ioutil import __version__
from ioutil.config import COPY_STRATEGIES, load_config, resolve_path

READ_TYPES = ("int", "float", "double", "char", "string")


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Configure the ioutil logger: level from --verbose/--quiet or config, console handler,
    optional file handler from config.
    """
    config = load_config()
    log_cfg = config.get("logging") or {}
    if verbose:
        level_name = "DEBUG"
    elif quiet:
        level_name = "ERROR"
    else:
        level_name = (log_cfg.get("level") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    root = logging.getLogger("ioutil")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)
        log_file = log_cfg.get("file")
        if log_file:
            try:
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setFormatter(fmt)
                root.addHandler(fh)
            except OSError:
                pass


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ioutil",
        description="Copy streams and read typed values from the console.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-v", "--verbose", action="store_true", help="Verbose (DEBUG) output.")
    log_group.add_argument("-q", "--quiet", action="store_true", help="Quiet (errors only).")

    # Same flags on subparsers so "ioutil copy a b -v" works
    global_flags = argparse.ArgumentParser(add_help=False)
    log_grp = global_flags.add_mutually_exclusive_group()
    # SUPPRESS defaults so "ioutil -v copy a b" keeps the top-level flag
    log_grp.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS)
    log_grp.add_argument("-q", "--quiet", action="store_true", default=argparse.SUPPRESS, help=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    # copy
    p_copy = subparsers.add_parser("copy", help="Copy a file or stdin to a file or stdout.", parents=[global_flags])
    p_copy.add_argument("source", help="Source file ('-' for stdin).")
    p_copy.add_argument("dest", help="Destination file ('-' for stdout).")
    p_copy.add_argument(
        "--strategy",
        "-s",
        choices=COPY_STRATEGIES,
        help="Copy strategy (default: copy.strategy from config, else 'own').",
    )
    p_copy.add_argument("--text", action="store_true", help="Copy characters instead of bytes.")
    p_copy.add_argument("--encoding", type=str, help="Text encoding for --text (default: copy.encoding from config).")
    p_copy.set_defaults(run="copy")

    # read
    p_read = subparsers.add_parser("read", help="Read one typed value from stdin and print it.", parents=[global_flags])
    p_read.add_argument("type", choices=READ_TYPES, help="Value type to parse.")
    p_read.set_defaults(run="read")

    # config
    p_config = subparsers.add_parser("config", help="Show or edit configuration.", parents=[global_flags])
    p_config.add_argument("--show", action="store_true", help="Display current settings.")
    p_config.add_argument("--set", dest="set_key", metavar="KEY=VALUE", help="Set a configuration value.")
    p_config.add_argument("--file", type=Path, help="Config file to read and write (default: ~/.ioutil/config.json).")
    p_config.set_defaults(run="config")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=getattr(args, "verbose", False),
        quiet=getattr(args, "quiet", False),
    )
    run = getattr(args, "run", None)

    if getattr(args, "file", None) is not None:
        args.file = resolve_path(args.file)

    if run == "copy":
        from ioutil.commands.copy_cmd import run as cmd_run
    elif run == "read":
        from ioutil.commands.read_cmd import run as cmd_run
    elif run == "config":
        from ioutil.commands.config_cmd import run as cmd_run
    else:
        parser.print_help()
        sys.exit(0)

    cmd_run(args)
