from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import pytest
import requests

from factorio_wiki.config import WikiConfig

BASE_URL = "https://wiki.test"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64

Route = Union[Tuple[int, Union[str, bytes]], Exception]


class FakeResponse:
    def __init__(self, status_code: int, body: Union[str, bytes]) -> None:
        self.status_code = status_code
        self.content = body.encode("utf-8") if isinstance(body, str) else body

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def iter_content(self, chunk_size: int = 1) -> Iterator[bytes]:
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start : start + chunk_size]

    def close(self) -> None:
        pass

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class FakeSession:
    """Stand-in for requests.Session that serves canned responses by URL."""

    def __init__(self, routes: Optional[Dict[str, Route]] = None) -> None:
        self.routes: Dict[str, Route] = dict(routes or {})
        self.calls: List[str] = []

    def get(self, url: str, timeout=None, stream: bool = False) -> FakeResponse:
        self.calls.append(url)
        route = self.routes.get(url, (404, "not found"))
        if isinstance(route, Exception):
            raise route
        status, body = route
        return FakeResponse(status, body)

    def close(self) -> None:
        pass

    def __enter__(self) -> "FakeSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def icon(title: str, count: str) -> str:
    return (
        '<div class="factorio-icon">'
        f'<a href="/{title.replace(" ", "_")}" title="{title}"><img src="/images/{title}.png"></a>'
        f'<div class="factorio-icon-text">{count}</div>'
        "</div>"
    )


def recipe_tab(parts: Sequence[Tuple[str, str]]) -> str:
    icons = "".join(icon(title, count) for title, count in parts)
    return (
        '<div class="tabbertab"><table><tr>'
        '<td class="infobox-vrow-name">Recipe</td>'
        f'<td class="infobox-vrow-value">{icons}</td>'
        "</tr></table></div>"
    )


def detail_page(tabs: Iterable[str]) -> str:
    return "<html><body><div class=\"tabber\">" + "".join(tabs) + "</div></body></html>"


def index_page(entries: Iterable[Tuple[str, str, str]]) -> str:
    links = "".join(
        f'<div class="factorio-icon"><a href="{href}" title="{name}"><img src="{src}"></a></div>'
        for name, href, src in entries
    )
    return f"<html><body><div class=\"items\">{links}</div></body></html>"


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("factorio_wiki.tests")


@pytest.fixture
def config(tmp_path: Path) -> WikiConfig:
    cfg = WikiConfig(data_dir=tmp_path / "data", base_url=BASE_URL)
    cfg.ensure_directories()
    return cfg


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def html():
    """Builders for wiki markup fixtures."""

    class Builders:
        icon = staticmethod(icon)
        recipe_tab = staticmethod(recipe_tab)
        detail_page = staticmethod(detail_page)
        index_page = staticmethod(index_page)

    return Builders


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
