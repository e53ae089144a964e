"""Command-line front door for ccexp.

Parses CLI options, validates the scan root, and dispatches into the
interactive browser runtime.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from . import __version__
from .preview import DEFAULT_STYLE
from .runtime import run_app
from .ui_theme import available_theme_names


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccexp",
        description="Browse CLAUDE.md, slash commands, and Claude settings files in the terminal.",
    )
    parser.add_argument(
        "-p",
        "--path",
        default=None,
        help="Directory to scan. Defaults to the current directory.",
    )
    parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Only scan the top level of --path.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered for later runs.",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path).expanduser() if args.path else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    run_app(
        path,
        recursive=not args.no_recursive,
        theme_name=args.theme,
        no_color=args.no_color,
        style=args.style,
    )
