"""Data models for the cached item catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _require_str(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise ValueError(f"expected string field '{key}', got {type(value).__name__}")
    return value


def _require_mapping(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"expected object, got {type(value).__name__}")
    return value


@dataclass
class Ingredient:
    """One input of a crafting recipe."""

    count: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "title": self.title}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Ingredient":
        return cls(count=_require_str(payload, "count"), title=_require_str(payload, "title"))


@dataclass
class Recipe:
    """Crafting time and the ordered ingredient list of an item."""

    time: str
    ingredients: List[Ingredient] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "ingredients": [ingredient.to_dict() for ingredient in self.ingredients],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Recipe":
        raw_ingredients = payload.get("ingredients")
        if not isinstance(raw_ingredients, list):
            raise ValueError("expected list field 'ingredients'")
        return cls(
            time=_require_str(payload, "time"),
            ingredients=[Ingredient.from_dict(_require_mapping(raw)) for raw in raw_ingredients],
        )


@dataclass
class ItemImage:
    """Remote image path of an item and its file name once downloaded."""

    page_path: str
    local_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"pagePath": self.page_path}
        if self.local_path is not None:
            payload["localPath"] = self.local_path
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ItemImage":
        local_path = payload.get("localPath")
        if local_path is not None and not isinstance(local_path, str):
            raise ValueError("expected string field 'localPath'")
        return cls(page_path=_require_str(payload, "pagePath"), local_path=local_path)


@dataclass
class Item:
    """Catalog entry scraped from the wiki item index."""

    name: str
    ref: str
    img: ItemImage
    recipe: Optional[Recipe] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "ref": self.ref,
            "img": self.img.to_dict(),
        }
        if self.recipe is not None:
            payload["recipe"] = self.recipe.to_dict()
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Item":
        name = _require_str(payload, "name")
        if not name:
            raise ValueError("item name must not be empty")
        raw_recipe = payload.get("recipe")
        return cls(
            name=name,
            ref=_require_str(payload, "ref"),
            img=ItemImage.from_dict(_require_mapping(payload.get("img"))),
            recipe=Recipe.from_dict(_require_mapping(raw_recipe)) if raw_recipe is not None else None,
        )
