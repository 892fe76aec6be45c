"""Export Miniflux subscriptions as OPML and starred entries as RSS."""

__version__ = "0.1.0"
