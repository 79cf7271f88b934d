#!/usr/bin/env python3
"""Main entry point for tsm."""

import argparse
import os
import sys
import traceback
from pathlib import Path

import logbook

from tsm.core.candidates import discover_candidates, format_candidate_line
from tsm.core.deadline import Deadline
from tsm.core.shell import ExecShell
from tsm.core.tmux_service import DEFAULT_TIMEOUT, TmuxError, TmuxService
from tsm.models.config import AppConfig, ConfigError, write_default_config
from tsm.ui.selector import SelectionError, select_candidate

APP_NAME = "tsm"

log = logbook.Logger(__name__)


def log_handler(verbose: bool = False) -> logbook.Handler:
    """Create the stderr handler; WARNING and up unless verbose."""
    return logbook.StderrHandler(
        level=logbook.DEBUG if verbose else logbook.WARNING,
        format_string=(
            "{record.time:%H:%M:%S} - {record.channel} - "
            "{record.level_name} - {record.message}"
        ),
    )


def setup_exception_hook() -> None:
    """Log uncaught exceptions before the default hook prints them."""
    original_hook = sys.excepthook
    if getattr(original_hook, "installed_by_tsm", False):
        return

    def exception_hook(exc_type, exc_value, exc_tb):
        tb_str = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
        log.error("Uncaught exception:\n{}", tb_str)
        original_hook(exc_type, exc_value, exc_tb)

    exception_hook.installed_by_tsm = True
    sys.excepthook = exception_hook


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Fuzzy-pick a tmux session, git repository or bookmark",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Explicit config file path",
    )
    parser.add_argument(
        "--print",
        action="store_true",
        dest="print_only",
        help="Print candidates and exit",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write default config to the XDG path and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser.parse_args(argv)


def in_tmux() -> bool:
    """Return True when running inside a tmux client."""
    return os.environ.get("TMUX", "") != ""


def main(argv: list[str] | None = None, tmux: TmuxService | None = None) -> int:
    """Main entry point."""
    deadline = Deadline(DEFAULT_TIMEOUT)
    args = parse_args(argv)

    setup_exception_hook()
    with log_handler(args.verbose).applicationbound():
        return run(args, deadline, tmux)


def run(
    args: argparse.Namespace, deadline: Deadline, tmux: TmuxService | None = None
) -> int:
    """Execute the parsed command and return the exit status."""
    if args.init_config:
        try:
            path = write_default_config()
        except ConfigError as e:
            print(e, file=sys.stderr)
            return 1
        print(f"Wrote default config → {path}")
        return 0

    config = AppConfig.load(args.config)
    tmux = tmux or TmuxService(ExecShell())

    candidates = discover_candidates(config, tmux, deadline)

    if args.print_only:
        for candidate in candidates:
            print(format_candidate_line(candidate))
        return 0

    if not candidates:
        print("no candidates", file=sys.stderr)
        return 0

    try:
        selected = select_candidate(candidates)
    except SelectionError as e:
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return 1

    if selected is None:
        return 0

    try:
        tmux.open(selected, attached_already=in_tmux())
    except TmuxError as e:
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
