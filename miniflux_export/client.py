"""Minimal Miniflux API client."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import requests

from . import __version__
from .models import Entry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"miniflux-export/{__version__}"

_STATUS_MESSAGES = {
    401: "unauthorized (bad credentials)",
    403: "access forbidden",
    404: "resource not found",
    500: "internal server error",
}


class MinifluxError(RuntimeError):
    """Raised when the Miniflux API cannot satisfy a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(f"miniflux: {message}")
        self.status_code = status_code


class FeedReaderAPI(Protocol):
    """The two operations the exporters need from the server."""

    def export_opml(self) -> bytes:
        """Return the subscription list as raw OPML bytes."""

    def get_entries(self, **filters: Any) -> List[Entry]:
        """Return entries matching the filters; no filters means all entries."""


def normalise_base_url(base_url: str) -> str:
    url = base_url.strip().rstrip("/")
    if url.endswith("/v1"):
        url = url[: -len("/v1")]
    return url


def _entry_from_payload(item: Dict[str, Any]) -> Entry:
    try:
        entry_id = int(item["id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MinifluxError(f"entry without a valid id: {item!r}") from exc

    return Entry(
        id=entry_id,
        title=item.get("title") or "",
        url=item.get("url") or "",
        author=item.get("author") or "",
        content=item.get("content") or "",
        starred=bool(item.get("starred", False)),
    )


class MinifluxClient:
    """Talks to the Miniflux REST API using HTTP basic authentication."""

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = normalise_base_url(base_url)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (username, password)
        self.session.headers.update({"User-Agent": USER_AGENT})

    def export_opml(self) -> bytes:
        response = self._get("/v1/export")
        return response.content

    def get_entries(self, **filters: Any) -> List[Entry]:
        params = {key: value for key, value in filters.items() if value is not None}
        response = self._get("/v1/entries", params=params or None)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MinifluxError(f"invalid entries response: {exc}") from exc

        if not isinstance(payload, dict):
            raise MinifluxError("invalid entries response: expected a JSON object")

        items = payload.get("entries") or []
        entries = [_entry_from_payload(item) for item in items]
        logger.debug(
            "Fetched %d entries (server total %s)", len(entries), payload.get("total")
        )
        return entries

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None):
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise MinifluxError(f"request to {url} failed: {exc}") from exc

        if response.status_code >= 400:
            raise self._error_for(response)
        return response

    @staticmethod
    def _error_for(response) -> MinifluxError:
        status = response.status_code
        server_message = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            server_message = body.get("error_message")

        if status in _STATUS_MESSAGES:
            return MinifluxError(_STATUS_MESSAGES[status], status_code=status)
        if status == 400:
            return MinifluxError(
                f"bad request ({server_message or 'no details'})", status_code=status
            )

        message = f"status code={status}"
        if server_message:
            message = f"{message} ({server_message})"
        return MinifluxError(message, status_code=status)
