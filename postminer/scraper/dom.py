"""Thin HTML query layer over BeautifulSoup.

The extraction modules only rely on the helpers below plus plain bs4
``select`` / ``select_one`` / ``get`` calls, so the heuristics can be
exercised against small synthetic documents.
"""

from __future__ import annotations

import copy
from typing import Iterable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse *html* with the stdlib-backed ``html.parser`` tree builder."""
    return BeautifulSoup(html or "", "html.parser")


def text_of(el: Tag) -> str:
    """Return the concatenated, stripped text content of *el*."""
    return el.get_text().strip()


def closest(el: Tag, selector: str) -> Optional[Tag]:
    """Return *el* or its nearest ancestor matching *selector*."""
    return el.css.closest(selector)


def clone(el: Tag) -> Tag:
    """Deep-copy *el* so removals never touch the live document."""
    return copy.copy(el)


def remove_all(elements: Iterable[Tag]) -> None:
    """Detach every element in *elements* from its tree."""
    for el in list(elements):
        el.extract()


def has_class(el: Tag, name: str) -> bool:
    return name in (el.get("class") or [])


def anchors_in(el: Optional[Tag]) -> List[Tag]:
    if el is None:
        return []
    return el.find_all("a")


def is_skippable_href(href: Optional[str]) -> bool:
    """``True`` for missing, script and fragment-only hrefs."""
    return not href or href.startswith("javascript:") or href.startswith("#")


def resolve_url(href: str, base_url: str) -> Optional[str]:
    """Resolve *href* against *base_url*; ``None`` if it cannot be resolved."""
    if href.startswith("http"):
        return href
    try:
        return urljoin(base_url, href)
    except ValueError:
        return None
