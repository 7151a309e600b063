"""Command-line front door for tripane.

Parses CLI options, applies them over the persisted config, configures
logging, then dispatches into the interactive runtime or a one-shot render.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import shutil
import sys
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME, BrowserConfig
from .errors import BrowserError
from .fs.filters import FILTER_DOTFILES
from .preview.resources import RELEASE_DEFERRED, RELEASE_EAGER
from .runtime import render_once, run_browser
from .ui_theme import available_theme_names, resolve_theme

DEBUG_ENV_VAR = "TRIPANE_DEBUG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"


def configure_logging(log_file: str | None) -> Path | None:
    """Send log records to a file when requested; the TUI owns the terminal."""
    if log_file is None and os.environ.get(DEBUG_ENV_VAR, "") != "1":
        return None
    path = Path(log_file) if log_file is not None else default_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(filename=str(path), level=logging.DEBUG, format=LOG_FORMAT)
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tripane",
        description="Browse the filesystem in parent, child and preview panes.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Start path. Defaults to current directory.")
    parser.add_argument("--style", default=None, help="Pygments style name for file previews.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    policy = parser.add_mutually_exclusive_group()
    policy.add_argument(
        "--kill-eagerly",
        dest="release_policy",
        action="store_const",
        const=RELEASE_EAGER,
        help="Release each preview as soon as the cursor leaves it.",
    )
    policy.add_argument(
        "--keep-previews",
        dest="release_policy",
        action="store_const",
        const=RELEASE_DEFERRED,
        help="Keep visited previews open until the browser closes.",
    )
    parser.add_argument("--show-hidden", action="store_true", help="Start with dotfiles visible.")
    parser.add_argument("--render", action="store_true", help="Print the panes once and exit.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Columns for --render output.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Rows for --render output.")
    parser.add_argument("--log-file", default=None, help=f"Write debug logs here (also enabled by {DEBUG_ENV_VAR}=1).")
    return parser


def config_from_args(args: argparse.Namespace, base: BrowserConfig) -> BrowserConfig:
    """Overlay CLI flags on the persisted config."""
    changes: dict[str, object] = {}
    if args.style:
        changes["style"] = args.style
    if args.theme:
        changes["theme"] = args.theme
    if args.release_policy is not None:
        changes["release_policy"] = args.release_policy
    if args.show_hidden:
        changes["filters"] = tuple(name for name in base.filters if name != FILTER_DOTFILES)
    if args.no_color:
        changes["colorize"] = False
    return dataclasses.replace(base, **changes) if changes else base


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch tripane.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args()
    configure_logging(args.log_file)

    path = Path(args.path or default_path or Path.cwd()).expanduser()
    if not path.exists() and not path.is_symlink():
        raise SystemExit(f"Path not found: {path}")

    config = config_from_args(args, BrowserConfig.load())
    theme = resolve_theme(config.theme, no_color=args.no_color)

    try:
        if args.render:
            term = shutil.get_terminal_size((80, 24))
            sys.stdout.write(
                render_once(
                    path,
                    config=config,
                    theme=theme,
                    colorize=config.colorize and not args.no_color,
                    columns=args.width or term.columns,
                    rows=args.height or term.lines,
                )
            )
            return
        status = run_browser(path, config=config, theme=theme, colorize=config.colorize)
    except BrowserError as exc:
        raise SystemExit(exc.message) from exc
    if status:
        raise SystemExit(status)


if __name__ == "__main__":
    main()
