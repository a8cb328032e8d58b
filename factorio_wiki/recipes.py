"""Recipe extraction from item detail pages."""

from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .models import Ingredient, Recipe

RECIPE_CONTAINER_SELECTOR = ".tabbertab"
VALUE_CELL_SELECTOR = ".infobox-vrow-value"
ICON_SELECTOR = ".factorio-icon"
ICON_TEXT_SELECTOR = ".factorio-icon-text"


def _icon_text(part: Tag) -> str:
    return "".join(label.get_text() for label in part.select(ICON_TEXT_SELECTOR))


def _icon_title(part: Tag) -> str:
    anchor = part.find("a")
    if anchor is None:
        return ""
    return anchor.get("title", "")


def extract_recipe(container: Tag) -> Recipe:
    """Read crafting time and ingredients from one recipe container.

    The icons in the value cell are positional: the first one carries the
    crafting time and the last one the produced item, everything in between
    is an ingredient.
    """
    value_cell = container.select_one(VALUE_CELL_SELECTOR)
    if value_cell is None:
        return Recipe(time="")

    parts = value_cell.select(ICON_SELECTOR)
    time = _icon_text(parts[0]) if parts else ""
    ingredients = [
        Ingredient(count=_icon_text(part), title=_icon_title(part))
        for part in parts[1:-1]
    ]
    return Recipe(time=time, ingredients=ingredients)


def find_recipe(document: BeautifulSoup) -> Optional[Recipe]:
    """Return the recipe of a detail page, or None when it has no single-variant recipe."""
    containers = document.select(RECIPE_CONTAINER_SELECTOR)
    if len(containers) not in (1, 2):
        return None
    return extract_recipe(containers[0])
