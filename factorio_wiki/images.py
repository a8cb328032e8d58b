"""Image downloading and validation utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests
from filetype import guess

from .errors import ImageDownloadError

CHUNK_SIZE = 64 * 1024


def detect_image_format(path: Path) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(str(path))
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        if ext == "jpeg":
            return "jpg"
        return ext
    return None


def ensure_image(
    session: requests.Session,
    url: str,
    destination: Path,
    logger: logging.Logger,
    timeout: Optional[float] = None,
) -> bool:
    """Download ``url`` to ``destination`` unless the file already exists.

    The body is streamed to a ``.part`` file next to the destination and only
    renamed into place once the transfer has completed and the payload looks
    like an image, so a file under the final name is always complete.

    Returns True when a download was performed.
    """
    if destination.exists():
        return False

    logger.debug("Download file '%s' to '%s'", url, destination)
    partial = destination.with_name(destination.name + ".part")
    try:
        with session.get(url, stream=True, timeout=timeout) as resp:
            if not 200 <= resp.status_code < 300:
                raise ImageDownloadError(url, f"HTTP {resp.status_code}")
            with partial.open("wb") as handle:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
    except requests.RequestException as exc:
        partial.unlink(missing_ok=True)
        raise ImageDownloadError(url, str(exc)) from exc
    except (ImageDownloadError, OSError):
        partial.unlink(missing_ok=True)
        raise

    extension = detect_image_format(partial)
    if extension is None:
        partial.unlink(missing_ok=True)
        raise ImageDownloadError(url, "unsupported image type")

    partial.replace(destination)
    logger.debug("Stored %s image at %s", extension, destination)
    return True
