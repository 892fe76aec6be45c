"""Shared data models for miniflux_export."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass
class Entry:
    """Entry as returned by the Miniflux API."""

    id: int
    title: str
    url: str
    author: str
    content: str
    starred: bool


@dataclass
class FeedItem:
    """Single item of an exported RSS feed."""

    title: str
    link: str
    author: str
    description: str
    id: str


@dataclass
class FeedDocument:
    title: str
    description: str
    link: str
    created: datetime
    items: List[FeedItem] = field(default_factory=list)
