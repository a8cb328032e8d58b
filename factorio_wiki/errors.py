"""Exceptions raised while scraping and caching wiki data."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class FactorioWikiError(Exception):
    """Base exception for scraper errors."""


class FetchError(FactorioWikiError):
    """Raised when a wiki page cannot be fetched.

    ``status`` is the HTTP status code, or ``None`` when the request failed
    before a response was received.
    """

    def __init__(self, url: str, status: Optional[int] = None) -> None:
        self.url = url
        self.status = status
        if status is None:
            message = f"Failed to fetch {url}"
        else:
            message = f"Failed to fetch {url} (HTTP {status})"
        super().__init__(message)


class ImageDownloadError(FactorioWikiError):
    """Raised when an image could not be stored locally."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download {url}: {reason}")


class CorruptCacheError(FactorioWikiError):
    """The cached item document does not have the expected structure."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Corrupt item cache {path}: {reason}")


class MissingRecipeError(FactorioWikiError):
    """An item was rendered before its recipe was scraped."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Item '{name}' has no recipe")
