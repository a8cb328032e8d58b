"""Incremental scraping of the wiki item catalog."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

import requests
from bs4 import BeautifulSoup

from .config import WikiConfig
from .errors import ImageDownloadError
from .fetcher import fetch_page
from .images import ensure_image
from .models import Item, ItemImage
from .recipes import find_recipe
from .store import LoadStatus, load_items, save_items
from .utils import build_url, image_filename

INDEX_PAGE = "/Items"
INDEX_ANCHOR_SELECTOR = ".factorio-icon a"


@dataclass
class Catalog:
    """Ordered item list and whether it diverged from the cache file."""

    items: List[Item] = field(default_factory=list)
    dirty: bool = False


def parse_index(document: BeautifulSoup, logger: logging.Logger) -> List[Item]:
    """Build one item per icon link on the index page, sorted by name."""
    items: List[Item] = []
    seen: Set[str] = set()
    for anchor in document.select(INDEX_ANCHOR_SELECTOR):
        name = anchor.get("title")
        ref = anchor.get("href")
        img = anchor.find("img")
        src = img.get("src") if img is not None else None
        if not name or not ref or not src:
            logger.debug("Skipping incomplete icon link: %s", anchor)
            continue
        if name in seen:
            continue
        seen.add(name)
        logger.info("Add item: '%s'", name)
        items.append(Item(name=name, ref=ref, img=ItemImage(page_path=src)))

    items.sort(key=lambda item: item.name)
    return items


def resolve_items(
    config: WikiConfig,
    session: requests.Session,
    logger: logging.Logger,
) -> Catalog:
    """Use the cached catalog when present, otherwise scrape the index page."""
    result = load_items(config.items_path, logger)
    if result.loaded:
        return Catalog(items=result.items)
    if result.status is LoadStatus.CORRUPT:
        logger.warning("%s; rebuilding from the wiki", result.error)

    logger.debug("Load items from Factorio Wiki")
    document = fetch_page(
        session, build_url(config.base_url, INDEX_PAGE), logger, config.request_timeout
    )
    return Catalog(items=parse_index(document, logger), dirty=True)


def _forget_local_image(item: Item) -> bool:
    if item.img.local_path is None:
        return False
    item.img.local_path = None
    return True


def ensure_item_image(
    item: Item,
    config: WikiConfig,
    session: requests.Session,
    logger: logging.Logger,
) -> bool:
    """Make sure the item's image is on disk and recorded; True if the item changed.

    When the image cannot be stored, a previously recorded ``local_path`` is
    cleared so it never names a missing file.
    """
    name = image_filename(item.img.page_path)
    if name is None:
        logger.warning("Image for '%s' has no file name: '%s'", item.name, item.img.page_path)
        return _forget_local_image(item)

    destination = config.image_dir / name
    if not destination.exists():
        url = build_url(config.base_url, item.img.page_path)
        try:
            ensure_image(session, url, destination, logger, config.request_timeout)
        except ImageDownloadError as exc:
            logger.warning("Image for '%s' not stored: %s", item.name, exc)
            return _forget_local_image(item)

    if item.img.local_path != name:
        item.img.local_path = name
        return True
    return False


def ensure_item_images(
    catalog: Catalog,
    config: WikiConfig,
    session: requests.Session,
    logger: logging.Logger,
) -> bool:
    changed = False
    for item in catalog.items:
        if ensure_item_image(item, config, session, logger):
            changed = True
    if changed:
        catalog.dirty = True
    return changed


def ensure_recipe(
    item: Item,
    config: WikiConfig,
    session: requests.Session,
    logger: logging.Logger,
) -> bool:
    """Scrape the item's recipe unless it already has one; True if one was added."""
    if item.recipe is not None:
        return False

    document = fetch_page(
        session, build_url(config.base_url, item.ref), logger, config.request_timeout
    )
    recipe = find_recipe(document)
    if recipe is None:
        return False

    item.recipe = recipe
    logger.info(
        "Add recipe to '%s': '%s'", item.name, json.dumps(recipe.to_dict(), ensure_ascii=False)
    )
    return True


def ensure_recipes(
    catalog: Catalog,
    config: WikiConfig,
    session: requests.Session,
    logger: logging.Logger,
) -> bool:
    changed = False
    for item in catalog.items:
        if ensure_recipe(item, config, session, logger):
            changed = True
    if changed:
        catalog.dirty = True
    return changed


def build_catalog(
    config: WikiConfig,
    session: requests.Session,
    logger: logging.Logger,
) -> Catalog:
    """Run one incremental scrape pass and persist the catalog if it changed.

    A ``FetchError`` raised by any page aborts the pass before anything is
    written, so the cache file only ever reflects completed runs.
    """
    catalog = resolve_items(config, session, logger)
    ensure_item_images(catalog, config, session, logger)
    ensure_recipes(catalog, config, session, logger)
    if catalog.dirty:
        save_items(config.items_path, catalog.items, logger)
    return catalog


def load_catalog(config: WikiConfig, logger: logging.Logger) -> Catalog:
    """Read the cached catalog without touching the network."""
    result = load_items(config.items_path, logger)
    if result.status is LoadStatus.CORRUPT:
        logger.error("%s", result.error)
    return Catalog(items=result.items)


def init_catalog(
    config: WikiConfig,
    logger: logging.Logger,
    readonly: bool = True,
    session: Optional[requests.Session] = None,
) -> Catalog:
    """Prepare the data directories and either load or build the catalog."""
    config.ensure_directories()
    if readonly:
        return load_catalog(config, logger)
    if session is None:
        raise ValueError("A session is required to build the catalog")
    return build_catalog(config, session, logger)
