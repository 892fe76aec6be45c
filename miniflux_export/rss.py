"""Build and render the RSS feed of starred entries."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from .models import Entry, FeedDocument, FeedItem
from .templating import get_environment

logger = logging.getLogger(__name__)

FEED_TITLE = "Miniflux starred entries"
FEED_DESCRIPTION = "RSS feed from all starred entries in Miniflux"


def entry_to_item(entry: Entry) -> FeedItem:
    """Map a Miniflux entry onto an RSS item, copying fields verbatim."""
    return FeedItem(
        title=entry.title,
        link=entry.url,
        author=entry.author,
        description=entry.content,
        id=str(entry.id),
    )


def build_starred_feed(
    entries: Iterable[Entry], host: str, created: datetime
) -> FeedDocument:
    """Collect starred entries, in server order, into a feed document."""
    feed = FeedDocument(
        title=FEED_TITLE,
        description=FEED_DESCRIPTION,
        link=host,
        created=created,
    )
    for entry in entries:
        if not entry.starred:
            continue
        feed.items.append(entry_to_item(entry))

    logger.debug("Selected %d starred entries", len(feed.items))
    return feed


def render_rss(feed: FeedDocument) -> str:
    """Serialize the feed document as RSS 2.0 XML."""
    env = get_environment()
    template = env.get_template("rss.xml")
    return template.render(feed=feed)
