"""Command-line interface for the miniflux_export application."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .client import MinifluxClient
from .config import DEFAULT_HOST, ExportConfig
from .exporter import execute

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="miniflux-export",
        description="Export Miniflux subscriptions (OPML) and starred entries (RSS).",
    )
    parser.add_argument(
        "-output-opml",
        "--output-opml",
        dest="opml_path",
        default="",
        metavar="PATH",
        help="Output filename for the OPML export, f.e. /tmp/opml.xml.",
    )
    parser.add_argument(
        "-output-bookmarks",
        "--output-bookmarks",
        dest="bookmarks_path",
        default="",
        metavar="PATH",
        help="Output filename for starred entries, f.e. /tmp/bookmarks.txt.",
    )
    parser.add_argument(
        "-user", "--user", dest="username", default="", help="Miniflux username."
    )
    parser.add_argument(
        "-pass",
        "--pass",
        dest="password",
        default="",
        help="Miniflux password; use -pass=VALUE when it starts with '-'.",
    )
    parser.add_argument(
        "-host",
        "--host",
        dest="host",
        default=DEFAULT_HOST,
        help=f"Miniflux base URL (default: {DEFAULT_HOST}).",
    )
    parser.add_argument(
        "-s",
        dest="silent",
        action="store_true",
        help="Suppress the happy-flow output; errors are still reported.",
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING). Ignored with -s.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file.",
    )

    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = ExportConfig(
        host=args.host,
        username=args.username,
        password=args.password,
        opml_path=args.opml_path,
        bookmarks_path=args.bookmarks_path,
        silent=args.silent,
        log_level=args.log_level,
        log_file=args.log_file,
    )

    try:
        config.validate()
        configure_logging(config.effective_log_level, config.log_file)
    except ValueError as exc:
        parser.error(str(exc))

    if not config.username and (config.opml_path or config.bookmarks_path):
        logger.warning("No Miniflux username given; requests will likely be rejected.")

    try:
        client = MinifluxClient(config.host, config.username, config.password)
        result = execute(config, client)
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during export.")
        return 1

    return 0 if result.ok else 1
