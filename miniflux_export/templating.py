"""Jinja2 environment for miniflux_export templates."""

from __future__ import annotations

import re
from datetime import datetime
from email.utils import format_datetime
from importlib import resources

from jinja2 import Environment, FileSystemLoader, select_autoescape

_ENV: Environment | None = None

# Anything outside the XML 1.0 Char production, lone surrogates included.
_INVALID_XML_CHARS = re.compile(
    r"[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]"
)


def _xml_text(value: object) -> str:
    """Replace characters XML cannot carry with U+FFFD."""
    if value is None:
        return ""
    return _INVALID_XML_CHARS.sub("\ufffd", str(value))


def _rfc822(value: datetime | None) -> str:
    """Format a datetime the way RSS 2.0 expects (RFC 822)."""
    if value is None:
        return ""
    return format_datetime(value)


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        _ENV = Environment(
            loader=loader,
            autoescape=select_autoescape(["xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        _ENV.filters["rfc822"] = _rfc822
        _ENV.filters["xml_text"] = _xml_text
    return _ENV
