"""Command-line entry point for the Factorio wiki scraper."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable, Sequence

import requests

from .catalog import init_catalog
from .config import DEFAULT_BASE_URL, DEFAULT_DATA_DIR, WikiConfig
from .errors import FactorioWikiError
from .render import render_item_html, write_catalog_html

logger = logging.getLogger("factorio_wiki")

DEFAULT_COMMAND = "show"


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return (DEFAULT_COMMAND,)
    first = argv[0]
    if first in commands or first in ("-h", "--help"):
        return argv
    return (DEFAULT_COMMAND, *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--data-dir",
        default=DEFAULT_DATA_DIR,
        type=Path,
        help="Directory holding items.json and downloaded images",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="Base URL of the wiki",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: wait indefinitely)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape Factorio wiki items and recipes into a local cache.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser(
        "show", help="Print the recipe of the first cached item (default)"
    )
    _add_common_arguments(show_parser)

    scrape_parser = subparsers.add_parser(
        "scrape", help="Fetch missing items, images and recipes and update the cache"
    )
    _add_common_arguments(scrape_parser)

    render_parser = subparsers.add_parser(
        "render", help="Write an HTML page for the cached catalog"
    )
    _add_common_arguments(render_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )


def _build_config(args: argparse.Namespace) -> WikiConfig:
    return WikiConfig(
        data_dir=Path(args.data_dir).resolve(),
        base_url=args.base_url,
        request_timeout=args.timeout,
    )


def _run_show(config: WikiConfig) -> int:
    catalog = init_catalog(config, logger, readonly=True)
    if not catalog.items:
        logger.error("No cached items in %s; run 'scrape' first", config.items_path)
        return 1

    result = render_item_html(catalog.items[0])
    if not result.ok:
        logger.error("%s", result.error)
        return 1
    sys.stdout.write(result.html + "\n")
    sys.stdout.flush()
    return 0


def _run_scrape(config: WikiConfig) -> int:
    overall_start = time.perf_counter()
    with requests.Session() as session:
        catalog = init_catalog(config, logger, readonly=False, session=session)
    total_elapsed = time.perf_counter() - overall_start

    with_recipe = sum(1 for item in catalog.items if item.recipe is not None)
    with_image = sum(1 for item in catalog.items if item.img.local_path)
    logger.info(
        "Finished in %.2fs (%d items, %d with images, %d with recipes, %s)",
        total_elapsed,
        len(catalog.items),
        with_image,
        with_recipe,
        "saved" if catalog.dirty else "unchanged",
    )
    return 0


def _run_render(config: WikiConfig) -> int:
    catalog = init_catalog(config, logger, readonly=True)
    if not catalog.items:
        logger.error("No cached items in %s; run 'scrape' first", config.items_path)
        return 1
    write_catalog_html(catalog.items, config.html_path, logger)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    config = _build_config(args)

    runners = {
        "show": _run_show,
        "scrape": _run_scrape,
        "render": _run_render,
    }
    try:
        return runners[args.command](config)
    except FactorioWikiError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
