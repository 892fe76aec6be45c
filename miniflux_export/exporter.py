"""The OPML and bookmark export pipelines."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

import humanize
from jinja2 import TemplateError

from .client import FeedReaderAPI, MinifluxError
from .config import ExportConfig
from .rss import build_starred_feed, render_rss

logger = logging.getLogger(__name__)

FILE_MODE = 0o644


@dataclass
class ExportResult:
    """Outcome of a single export pipeline."""

    name: str
    path: str
    ok: bool
    size: int = 0
    count: Optional[int] = None
    error: Optional[str] = None


@dataclass
class RunResult:
    """Returned data after running the requested pipelines."""

    results: List[ExportResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)


def write_file(path: str, data: bytes) -> None:
    """Create or truncate ``path`` and write ``data`` to it."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    with os.fdopen(fd, "wb") as handle:
        handle.write(data)


def export_opml(client: FeedReaderAPI, path: str) -> ExportResult:
    """Write the server's OPML export to ``path`` byte for byte."""
    try:
        document = client.export_opml()
    except MinifluxError as exc:
        logger.error("OPML export failed: %s", exc)
        return ExportResult("opml", path, ok=False, error=str(exc))

    try:
        write_file(path, document)
    except OSError as exc:
        logger.error("Unable to write OPML to %s: %s", path, exc)
        return ExportResult("opml", path, ok=False, error=str(exc))

    logger.info(
        "export OPML done, %s written to file %s",
        humanize.naturalsize(len(document)),
        path,
    )
    return ExportResult("opml", path, ok=True, size=len(document))


def export_bookmarks(
    client: FeedReaderAPI,
    path: str,
    host: str,
    now: Optional[datetime] = None,
) -> ExportResult:
    """Write every starred entry to ``path`` as an RSS 2.0 feed."""
    created = now or datetime.now(timezone.utc)

    try:
        entries = client.get_entries()
    except MinifluxError as exc:
        logger.error("Fetching entries failed: %s", exc)
        return ExportResult("bookmarks", path, ok=False, error=str(exc))

    feed = build_starred_feed(entries, host, created)

    try:
        document = render_rss(feed).encode("utf-8")
    except (TemplateError, UnicodeError) as exc:
        logger.error("error exporting starred items to RSS feed: %s", exc)
        return ExportResult("bookmarks", path, ok=False, error=str(exc))

    try:
        write_file(path, document)
    except OSError as exc:
        logger.error("Unable to write bookmarks to %s: %s", path, exc)
        return ExportResult("bookmarks", path, ok=False, error=str(exc))

    count = len(feed.items)
    logger.info(
        "export %d bookmarks done, %s written to file %s",
        count,
        humanize.naturalsize(len(document)),
        path,
    )
    return ExportResult("bookmarks", path, ok=True, size=len(document), count=count)


def execute(config: ExportConfig, client: FeedReaderAPI) -> RunResult:
    """Run the requested pipelines in order: OPML first, then bookmarks."""
    result = RunResult()

    if config.opml_path:
        result.results.append(export_opml(client, config.opml_path))
    else:
        logger.info("skipping opml export (see --help for more info)")

    if config.bookmarks_path:
        result.results.append(
            export_bookmarks(client, config.bookmarks_path, config.host)
        )
    else:
        logger.info(
            "skipping export of bookmarks/starred entries (see --help for more info)"
        )

    return result
