"""Runtime configuration for miniflux_export."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

DEFAULT_HOST = "http://localhost:8080"


@dataclass(frozen=True)
class ExportConfig:
    """Options read once from the command line."""

    host: str = DEFAULT_HOST
    username: str = ""
    password: str = ""
    opml_path: str = ""
    bookmarks_path: str = ""
    silent: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> None:
        """Raise ValueError when the options cannot be used."""
        parsed = urlparse(self.host)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"Invalid Miniflux host {self.host!r}; expected e.g. {DEFAULT_HOST}"
            )

    @property
    def effective_log_level(self) -> str:
        # Silent mode hides the happy-flow output but keeps errors visible.
        return "ERROR" if self.silent else self.log_level
