"""HTML rendering of cached catalog data."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import List, Optional, Sequence

from .config import IMAGE_DIRNAME
from .errors import MissingRecipeError
from .models import Item


@dataclass
class RenderResult:
    """Rendered fragment, or the reason it could not be produced."""

    html: Optional[str] = None
    error: Optional[MissingRecipeError] = None

    @property
    def ok(self) -> bool:
        return self.html is not None


def render_item_html(item: Item) -> RenderResult:
    """Render the crafting time followed by one ``title(count)`` line per ingredient."""
    if item.recipe is None:
        return RenderResult(error=MissingRecipeError(item.name))

    parts = [f"<div>{escape(item.recipe.time)}</div>"]
    for ingredient in item.recipe.ingredients:
        parts.append(f"<div>{escape(ingredient.title)}({escape(ingredient.count)})</div>")
    return RenderResult(html="".join(parts))


def _render_item_section(item: Item) -> str:
    lines: List[str] = ["<section>"]
    if item.img.local_path:
        src = escape(f"{IMAGE_DIRNAME}/{item.img.local_path}", quote=True)
        lines.append(f'  <img src="{src}" alt="{escape(item.name, quote=True)}">')
    lines.append(f"  <h2>{escape(item.name)}</h2>")
    result = render_item_html(item)
    lines.append(f"  {result.html}" if result.ok else "  <p>no recipe</p>")
    lines.append("</section>")
    return "\n".join(lines)


def render_catalog_html(items: Sequence[Item]) -> str:
    """Render a standalone page listing every cached item."""
    sections = "\n".join(_render_item_section(item) for item in items)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head><meta charset=\"utf-8\"><title>Factorio items</title></head>\n"
        "<body>\n"
        f"{sections}\n"
        "</body>\n"
        "</html>\n"
    )


def write_catalog_html(items: Sequence[Item], path: Path, logger: logging.Logger) -> Path:
    path.write_text(render_catalog_html(items), encoding="utf-8")
    logger.info("Saved catalog page to %s", path)
    return path
