"""Body text extraction for post detail pages."""

from __future__ import annotations

from typing import Optional

import trafilatura
from bs4 import BeautifulSoup, NavigableString, Tag

from postminer.scraper.dom import clone, remove_all, text_of
from postminer.scraper.rules import (
    ATTACHMENT_ROW_EXACT,
    ATTACHMENT_ROW_PREFIXES,
    ATTACHMENT_ROW_SELECTOR,
    BLOCK_SELECTOR,
    CONTENT_CONTAINER_SELECTOR,
    MENU_DOMINATED_LENGTH,
    MENU_MARKERS,
    MIN_CONTAINER_LENGTH,
    NOISE_SELECTORS,
)


def _densest_div(soup: BeautifulSoup) -> Optional[Tag]:
    """Return the ``div`` with the most text, skipping large menu wrappers."""
    best: Optional[Tag] = None
    best_len = 0
    for div in soup.find_all("div"):
        text = div.get_text()
        length = len(text)
        if length > MENU_DOMINATED_LENGTH and MENU_MARKERS.search(text):
            continue
        if length > best_len and length > MIN_CONTAINER_LENGTH:
            best, best_len = div, length
    return best


def find_container(soup: BeautifulSoup) -> Optional[Tag]:
    """Pick the element holding the post body.

    Known board/CMS container selectors are tried first; otherwise the
    densest ``div`` wins.
    """
    container = soup.select_one(CONTENT_CONTAINER_SELECTOR)
    if container is not None:
        return container
    return _densest_div(soup)


def _is_attachment_row(el: Tag) -> bool:
    text = text_of(el)
    return text.startswith(ATTACHMENT_ROW_PREFIXES) or text == ATTACHMENT_ROW_EXACT


def clean_container(container: Tag) -> Tag:
    """Return a cleaned copy of *container*; the live document is untouched."""
    cleaned = clone(container)
    for selector in NOISE_SELECTORS:
        remove_all(cleaned.select(selector))
    remove_all([el for el in cleaned.select(ATTACHMENT_ROW_SELECTOR) if _is_attachment_row(el)])
    return cleaned


def linearize(container: Tag) -> str:
    """Flatten *container* to text, keeping line breaks and block boundaries."""
    for br in container.find_all("br"):
        br.replace_with(NavigableString("\n"))
    for block in container.select(BLOCK_SELECTOR):
        block.insert_after(NavigableString("\n"))
    return container.get_text()


def extract_text(soup: BeautifulSoup, html: Optional[str] = None, url: Optional[str] = None) -> str:
    """Extract the raw (unsanitised) body text of a detail page.

    When no container can be found and the original *html* is supplied,
    trafilatura's readability extraction is used as a last resort.
    """
    container = find_container(soup)
    if container is not None:
        return linearize(clean_container(container))

    if html:
        text: str | None = trafilatura.extract(
            html,
            include_links=False,
            include_images=False,
            include_tables=True,
            no_fallback=False,
            url=url,
        )
        return text or ""
    return ""
