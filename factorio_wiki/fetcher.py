"""HTTP page retrieval and HTML parsing."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from bs4 import BeautifulSoup

from .errors import FetchError


def fetch_page(
    session: requests.Session,
    url: str,
    logger: logging.Logger,
    timeout: Optional[float] = None,
) -> BeautifulSoup:
    """Fetch a wiki page with a single GET and return the parsed document."""
    logger.debug("Read html page: '%s'", url)
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(url) from exc

    if not 200 <= resp.status_code < 300:
        raise FetchError(url, resp.status_code)
    return BeautifulSoup(resp.text, "html.parser")
