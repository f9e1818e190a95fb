"""Command-line front door for treepicker.

Parses CLI options, configures logging, and resolves the start directory.
Then dispatches into the interactive picker runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import load_export_commands, load_show_hidden
from .runtime import run_picker

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_file: Path | None, level: str = "INFO") -> None:
    """Attach a file handler to the package logger when ``log_file`` is given.

    The terminal belongs to the TUI, so nothing is logged to stderr.
    """
    package_logger = logging.getLogger("treepicker")
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())


def resolve_start_dir(path: str | None) -> Path:
    """Resolve the start directory, exiting with a message when it is unusable."""
    try:
        start = Path(path) if path else Path.cwd()
        start = start.resolve()
    except OSError as exc:
        raise SystemExit(f"error getting current directory: {exc}") from exc
    if not start.is_dir():
        raise SystemExit(f"Not a directory: {start}")
    return start


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a directory tree, select files, and export their contents to an editor or the clipboard."
    )
    parser.add_argument("path", nargs="?", default=None, help="Start directory. Defaults to current directory.")
    parser.add_argument("--editor", default=None, help="Editor command used to open the export file.")
    terminal = parser.add_mutually_exclusive_group()
    terminal.add_argument(
        "--editor-terminal",
        dest="editor_terminal",
        action="store_true",
        default=None,
        help="Run the editor in this terminal and wait for it (vim, nano, ...).",
    )
    terminal.add_argument(
        "--no-editor-terminal", dest="editor_terminal", action="store_false", help="Start the editor detached."
    )
    parser.add_argument("--clipboard", default=None, help="Command that reads clipboard content from stdin.")
    hidden = parser.add_mutually_exclusive_group()
    hidden.add_argument("--show-hidden", dest="show_hidden", action="store_true", default=None, help="List dotfiles.")
    hidden.add_argument("--hide-hidden", dest="show_hidden", action="store_false", help="Skip dotfiles.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write a log to this file.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level for --log-file (default: INFO).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the picker."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.log_level)

    start_dir = resolve_start_dir(args.path)
    commands = load_export_commands(
        editor=args.editor,
        clipboard=args.clipboard,
        editor_terminal=args.editor_terminal,
    )
    show_hidden = load_show_hidden() if args.show_hidden is None else args.show_hidden
    run_picker(start_dir, commands, show_hidden=show_hidden, no_color=args.no_color)


if __name__ == "__main__":
    main()
