"""Utility helpers for URL and file name handling."""

from __future__ import annotations

import posixpath
from typing import Optional
from urllib.parse import unquote, urlparse

UNUSABLE_FILENAMES = {"", ".", ".."}


def build_url(base_url: str, path: str) -> str:
    """Join a wiki-relative path onto the base URL; absolute URLs pass through."""
    parsed = urlparse(path)
    if parsed.scheme and parsed.netloc:
        return path
    if path.startswith("//"):
        scheme = urlparse(base_url).scheme or "https"
        return f"{scheme}:{path}"
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def image_filename(page_path: str) -> Optional[str]:
    """Return the local file name for a remote image path, or None if it has none.

    The path is decoded before the basename is taken, so encoded separators
    never end up in the name.
    """
    path = unquote(urlparse(page_path).path)
    name = posixpath.basename(path.replace("\\", "/"))
    if name in UNUSABLE_FILENAMES:
        return None
    return name
