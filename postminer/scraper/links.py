"""Pick the best (title, link) pair among the anchors of a listing row."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from bs4 import Tag

from postminer.scraper.dom import is_skippable_href
from postminer.scraper.rules import PUNCTUATION_ONLY


@dataclass
class LinkChoice:
    title: str = ""
    link: Optional[str] = None
    # First usable href in the row, whatever its text.
    fallback_link: Optional[str] = None


def _is_meaningful(text: str) -> bool:
    return len(text) > 1 and not PUNCTUATION_ONLY.match(text)


def _image_title(anchor: Tag) -> str:
    img = anchor.find("img")
    alt = img.get("alt") if img is not None else None
    return (alt or anchor.get("title") or "").strip()


def rank_links(anchors: Iterable[Tag]) -> LinkChoice:
    """Rank *anchors* in a single pass.

    Text links beat image links; among text links the longest visible text
    wins.  Image ``alt`` (or the anchor's ``title``) is only consulted while
    no title has been found yet.
    """
    choice = LinkChoice()
    for anchor in anchors:
        href = anchor.get("href")
        if is_skippable_href(href):
            continue
        if choice.fallback_link is None:
            choice.fallback_link = href

        text = anchor.get_text().strip()
        if _is_meaningful(text):
            if len(text) > len(choice.title):
                choice.title, choice.link = text, href
        elif not choice.title:
            alt = _image_title(anchor)
            if _is_meaningful(alt):
                choice.title, choice.link = alt, href
    return choice
