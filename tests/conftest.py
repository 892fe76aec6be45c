import logging
from typing import List

import pytest

from miniflux_export.client import MinifluxError
from miniflux_export.models import Entry


class FakeAPI:
    """In-memory stand-in for the Miniflux API."""

    def __init__(self, opml=b"", entries=None, opml_error=None, entries_error=None):
        self.opml = opml
        self.entries = entries or []
        self.opml_error = opml_error
        self.entries_error = entries_error
        self.calls: List[str] = []

    def export_opml(self) -> bytes:
        self.calls.append("export_opml")
        if self.opml_error:
            raise self.opml_error
        return self.opml

    def get_entries(self, **filters) -> List[Entry]:
        self.calls.append("get_entries")
        if self.entries_error:
            raise self.entries_error
        return list(self.entries)


def make_entry(entry_id, starred, **overrides):
    values = dict(
        id=entry_id,
        title=f"Entry {entry_id}",
        url=f"https://example.com/{entry_id}",
        author="Jane Doe",
        content=f"<p>Body {entry_id}</p>",
        starred=starred,
    )
    values.update(overrides)
    return Entry(**values)


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def api_factory():
    return FakeAPI


@pytest.fixture
def fake_api():
    return FakeAPI(
        opml=b'<?xml version="1.0"?><opml version="2.0"><body/></opml>',
        entries=[make_entry(1, True), make_entry(2, False), make_entry(3, True)],
    )


@pytest.fixture
def broken_api():
    return FakeAPI(
        opml_error=MinifluxError("internal server error", status_code=500),
        entries_error=MinifluxError("internal server error", status_code=500),
    )


@pytest.fixture
def restore_root_logging():
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    yield root_logger

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)
