"""Listing-page extraction: find post rows by their date text.

Every element whose text carries a recognisable date is treated as a hint
that a post row sits around it.  The closest row-like ancestor is located,
its anchors are ranked (:mod:`postminer.scraper.links`) and, when the
anchors alone do not yield a usable title, a chain of title-recovery
fallbacks runs over the row markup.
"""

from __future__ import annotations

import re
from datetime import date
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from postminer.scraper.dates import parse_date
from postminer.scraper.dom import anchors_in, closest, has_class, parse_html, resolve_url, text_of
from postminer.scraper.links import rank_links
from postminer.scraper.models import PostSummary
from postminer.scraper.rules import (
    GARBAGE_TITLE,
    METADATA_LABELS,
    NARROW_ROW_CLASS,
    NARROW_ROW_TAGS,
    ROW_METADATA_PATTERNS,
    ROW_SELECTOR,
    TITLE_CANDIDATE_SELECTOR,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def is_garbage(text: str) -> bool:
    """Return ``True`` if *text* is punctuation, a bare date or a metadata label."""
    return bool(GARBAGE_TITLE.match(text))


def _row_anchors(row: Tag) -> List[Tag]:
    """Return the anchors to rank for *row*.

    Narrow containers (definition lists, ``cont_box`` blocks) usually hold
    only the text part of a card while the thumbnail link sits beside them,
    so their parent is searched instead.
    """
    anchors = anchors_in(row)
    if not anchors or row.name in NARROW_ROW_TAGS or has_class(row, NARROW_ROW_CLASS):
        anchors = anchors_in(row.parent)
    return anchors


def _title_from_candidates(row: Tag) -> Optional[str]:
    for el in row.select(TITLE_CANDIDATE_SELECTOR):
        text = text_of(el)
        if len(text) <= 1 or is_garbage(text):
            continue
        if any(label in text for label in METADATA_LABELS):
            continue
        return text
    return None


def _title_from_row_text(row: Tag) -> Optional[str]:
    cleaned = re.sub(r"\s+", " ", row.get_text()).strip()
    for pattern in ROW_METADATA_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    cleaned = cleaned.strip()
    if len(cleaned) > 1 and not is_garbage(cleaned):
        return cleaned
    return None


def pick_title_and_link(row: Tag) -> tuple[str, Optional[str]]:
    """Resolve the (title, href) pair for one listing row.

    The href is returned as found in the markup; callers resolve it.
    """
    choice = rank_links(_row_anchors(row))
    title, link = choice.title, choice.link

    if choice.fallback_link and (len(title) <= 1 or is_garbage(title)):
        recovered = _title_from_candidates(row)
        if recovered:
            title, link = recovered, choice.fallback_link

    if choice.fallback_link and len(title) <= 1:
        recovered = _title_from_row_text(row)
        if recovered:
            title, link = recovered, choice.fallback_link

    return title, link


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_posts(
    soup: BeautifulSoup,
    base_url: str,
    target_date: date,
    end_date: Optional[date] = None,
) -> List[PostSummary]:
    """Return the de-duplicated posts of a listing page dated on/after *target_date*.

    Args:
        soup: Parsed listing page.
        base_url: URL the listing was fetched from; relative links resolve
            against it.
        target_date: Earliest post date to keep.
        end_date: Optional latest post date to keep.

    Returns:
        Posts in document order.  No two share a link or a title.
    """
    posts: List[PostSummary] = []
    seen_links: set[str] = set()
    seen_titles: set[str] = set()

    for element in soup.find_all(True):
        element_date = parse_date(text_of(element))
        if element_date is None:
            continue

        row = closest(element, ROW_SELECTOR)
        if row is None:
            continue

        title, href = pick_title_and_link(row)
        if not href or not title:
            continue
        if element_date < target_date or (end_date is not None and element_date > end_date):
            continue

        link = resolve_url(href, base_url)
        if link is None or link in seen_links or title in seen_titles:
            continue

        seen_links.add(link)
        seen_titles.add(title)
        posts.append(PostSummary(title=title, link=link, date=element_date.isoformat()))

    return posts


def extract_posts_from_html(
    html: str,
    base_url: str,
    target_date: date,
    end_date: Optional[date] = None,
) -> List[PostSummary]:
    """Convenience wrapper around :func:`extract_posts` for raw markup."""
    return extract_posts(parse_html(html), base_url, target_date, end_date)
