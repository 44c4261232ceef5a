"""Next-page resolution for listing pages."""

from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import parse_qsl, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup, Tag

from postminer.scraper.dom import text_of
from postminer.scraper.models import PaginationState
from postminer.scraper.rules import (
    CURRENT_PAGE_SELECTOR,
    NEXT_BUTTON_SELECTOR,
    NEXT_TEXT_MARKERS,
    PAGE_QUERY_KEYS,
    PAGER_SELECTOR,
)

_NON_DIGITS = re.compile(r"[^0-9]")


def _digits(text: str) -> str:
    return _NON_DIGITS.sub("", text.strip())


def current_page(pager: Tag, page_url: str) -> int:
    """Read the highlighted page number, else ``pageIndex``/``page`` from *page_url*."""
    highlighted = pager.select_one(CURRENT_PAGE_SELECTOR)
    if highlighted is not None:
        digits = _digits(highlighted.get_text())
        return int(digits) if digits else 1

    params = dict(parse_qsl(urlsplit(page_url).query))
    for key in PAGE_QUERY_KEYS:
        digits = _digits(params.get(key, ""))
        if digits:
            return int(digits)
    return 1


def find_next_anchor(pager: Tag, target_page: int) -> Optional[Tag]:
    """Locate the anchor leading to *target_page* inside *pager*."""
    anchors = pager.find_all("a")
    for anchor in anchors:
        if _digits(anchor.get_text()) == str(target_page):
            return anchor

    button = pager.select_one(NEXT_BUTTON_SELECTOR)
    if button is not None:
        return button

    for anchor in anchors:
        text = text_of(anchor)
        if any(marker in text for marker in NEXT_TEXT_MARKERS):
            return anchor
    return None


def _query_segments(query: str) -> List[str]:
    return [segment for segment in query.split("&") if segment]


def _segment_key(segment: str) -> str:
    return segment.split("=", 1)[0]


def merge_query_url(href: str, page_url: str) -> str:
    """Resolve a query-only *href* while keeping the listing's other parameters.

    ``?pageIndex=2`` against ``/board?cbIdx=57&pageIndex=1`` gives
    ``/board?pageIndex=2&cbIdx=57``: keys in *href* win, keys it omits are
    carried over from *page_url*.  Segments are copied verbatim, never
    decoded, so EUC-KR percent-escapes and bare keys survive as written.
    """
    resolved = urlsplit(urljoin(page_url, href))
    segments = _query_segments(resolved.query)
    present = {_segment_key(segment) for segment in segments}
    for segment in _query_segments(urlsplit(page_url).query):
        key = _segment_key(segment)
        if key not in present:
            segments.append(segment)
            present.add(key)
    return urlunsplit(resolved._replace(query="&".join(segments)))


def resolve_pagination(soup: BeautifulSoup, page_url: str) -> PaginationState:
    """Work out the current page and the URL of the next one.

    Never raises: any failure is logged and reported as ``next_url=None``.
    """
    state = PaginationState()
    try:
        pager = soup.select_one(PAGER_SELECTOR)
        if pager is None:
            return state

        state.current_page = current_page(pager, page_url)
        anchor = find_next_anchor(pager, state.current_page + 1)
        if anchor is None:
            return state

        href = anchor.get("href")
        if not href or href.startswith("javascript:"):
            return state

        if href.startswith("?"):
            state.next_url = merge_query_url(href, page_url)
        else:
            state.next_url = urljoin(page_url, href)
    except Exception as exc:
        print(f"[PAGINATION] Next-page detection failed for {page_url!r}: {exc}")
        state.next_url = None
    return state
