"""JSON persistence for the item catalog."""

from __future__ import annotations

import enum
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import CorruptCacheError
from .models import Item


class LoadStatus(enum.Enum):
    LOADED = "loaded"
    MISSING = "missing"
    CORRUPT = "corrupt"


@dataclass
class LoadResult:
    """Outcome of reading the item cache."""

    status: LoadStatus
    items: List[Item] = field(default_factory=list)
    error: Optional[CorruptCacheError] = None

    @property
    def loaded(self) -> bool:
        return self.status is LoadStatus.LOADED


def items_present(path: Path) -> bool:
    """Return True when an item cache exists at ``path``."""
    return path.is_file()


def load_items(path: Path, logger: logging.Logger) -> LoadResult:
    """Read the cached catalog.

    A missing file is reported as ``MISSING`` and a document that is not a
    JSON array of item records as ``CORRUPT``; neither raises.
    """
    if not items_present(path):
        return LoadResult(LoadStatus.MISSING)

    logger.info("Load items from FS")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        return LoadResult(LoadStatus.CORRUPT, error=CorruptCacheError(path, str(exc)))

    if not isinstance(payload, list):
        reason = f"expected a JSON array, got {type(payload).__name__}"
        return LoadResult(LoadStatus.CORRUPT, error=CorruptCacheError(path, reason))

    items: List[Item] = []
    for index, raw in enumerate(payload):
        if not isinstance(raw, dict):
            reason = f"record {index} is not an object"
            return LoadResult(LoadStatus.CORRUPT, error=CorruptCacheError(path, reason))
        try:
            items.append(Item.from_dict(raw))
        except ValueError as exc:
            reason = f"record {index}: {exc}"
            return LoadResult(LoadStatus.CORRUPT, error=CorruptCacheError(path, reason))
    return LoadResult(LoadStatus.LOADED, items=items)


def save_items(path: Path, items: Sequence[Item], logger: logging.Logger) -> None:
    """Write the catalog as pretty-printed JSON, replacing any previous file."""
    logger.info("Save items")
    document = json.dumps([item.to_dict() for item in items], indent=2, ensure_ascii=False)
    temporary = path.with_name(path.name + ".tmp")
    try:
        temporary.write_text(document, encoding="utf-8")
        os.replace(temporary, path)
    except OSError:
        temporary.unlink(missing_ok=True)
        raise
