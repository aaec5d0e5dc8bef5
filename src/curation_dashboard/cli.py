"""CLI/bootstrap helpers for the curation dashboard."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from curation_dashboard.config import (
    CONFIG_APP_NAME,
    coerce_page_size,
    load_config,
    normalize_base_url,
)
from curation_dashboard.models import MAX_PAGE_SIZE, UserConfig

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    # auto
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _apply_overrides(args: argparse.Namespace, config: UserConfig) -> UserConfig:
    """Apply one-run CLI overrides on top of the loaded config."""
    overrides: dict[str, Any] = {}
    if args.base_url is not None:
        overrides["base_url"] = normalize_base_url(args.base_url)
    if args.page_size is not None:
        overrides["page_size"] = coerce_page_size(args.page_size)
    return replace(config, **overrides) if overrides else config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse, edit and publish backend content items in a TUI"
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Backend base URL (default: config value, http://localhost:8000)",
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help=f"Items per page (1-{MAX_PAGE_SIZE}; default: config value)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/curation-dashboard/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    args = build_parser().parse_args(argv)

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("curation-dashboard starting, cwd=%s", Path.cwd())

    config = _apply_overrides(args, load_config_fn())
    logger.debug("Using backend %s, page size %d", config.base_url, config.page_size)

    if not validate_interactive_tty_fn():
        print(
            "Error: curation-dashboard requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run curation-dashboard directly in a terminal session", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from curation_dashboard.app import CurationDashboard as _CurationDashboard

        app_factory = _CurationDashboard

    app = app_factory(config=config)
    app.run()
    return 0


__all__ = [
    "_apply_overrides",
    "_configure_color_mode",
    "_configure_logging",
    "_validate_interactive_tty",
    "build_parser",
    "main",
]
