"""Configuration objects and constants for the wiki scraper."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_BASE_URL = "https://wiki.factorio.com"
DEFAULT_DATA_DIR = Path("data")
ITEMS_FILENAME = "items.json"
IMAGE_DIRNAME = "img"
HTML_FILENAME = "index.html"


@dataclass
class WikiConfig:
    """Top-level settings that control scraping and caching behaviour."""

    data_dir: Path
    base_url: str = DEFAULT_BASE_URL
    request_timeout: Optional[float] = None

    @property
    def items_path(self) -> Path:
        return self.data_dir / ITEMS_FILENAME

    @property
    def image_dir(self) -> Path:
        return self.data_dir / IMAGE_DIRNAME

    @property
    def html_path(self) -> Path:
        return self.data_dir / HTML_FILENAME

    def ensure_directories(self) -> None:
        """Create the data and image directories if they are missing."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.image_dir.mkdir(parents=True, exist_ok=True)
