"""Image and attachment extraction for post detail pages.

Images come from content-image selectors.  Attachments come from three
independent scans whose results are unioned by URL:

1. anchors inside known file-area widgets,
2. any anchor in the document pointing at a document/image extension,
3. anchors next to an explicit "첨부파일" label.

Attachments that are really images are finally merged into the image list
unless an equivalent URL is already there.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from postminer.scraper.dom import clone, has_class, is_skippable_href, remove_all, resolve_url, text_of
from postminer.scraper.models import Attachment
from postminer.scraper.rules import (
    ATTACHMENT_LABEL,
    ATTACHMENT_LABEL_SELECTOR,
    ATTACHMENT_VALUE_SELECTOR,
    ATTACHMENT_VALUE_TAGS,
    DEFAULT_FILE_NAME,
    FILE_AREA_SELECTOR,
    FILE_EXTENSIONS,
    FILE_NAME_PARENT_NOISE,
    FILE_NOISE_CLASS,
    FILE_NOISE_HREF_MARKERS,
    FILE_NOISE_LABELS,
    GENERIC_FILE_NAMES,
    GENERIC_NAME_WORDS,
    ID_SIGNATURE,
    IMAGE_FILE_URL,
    IMAGE_SELECTOR,
    JUNK_IMAGE_KEYWORDS,
)


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def is_junk_image(url: str) -> bool:
    lowered = url.lower()
    return any(keyword in lowered for keyword in JUNK_IMAGE_KEYWORDS)


def is_noise_link(anchor: Tag, name: str, url: str) -> bool:
    """Preview buttons, zoom links and generic "download" widgets."""
    if any(label in name for label in FILE_NOISE_LABELS):
        return True
    if has_class(anchor, FILE_NOISE_CLASS):
        return True
    return any(marker in url for marker in FILE_NOISE_HREF_MARKERS)


def has_file_extension(url: str) -> bool:
    lowered = url.lower()
    return any(
        lowered.endswith(ext) or f"{ext}?" in lowered or f"{ext}&" in lowered
        for ext in FILE_EXTENSIONS
    )


def id_signature(url: str) -> Optional[str]:
    """Return e.g. ``"idx=123"`` for board download/view URLs."""
    match = ID_SIGNATURE.search(url.lower())
    return match.group(0) if match else None


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------

def extract_images(soup: BeautifulSoup, page_url: str) -> List[str]:
    """Return content image URLs resolved against the post's own URL."""
    images: Dict[str, None] = {}
    for img in soup.select(IMAGE_SELECTOR):
        src = img.get("src")
        if not src:
            continue
        url = resolve_url(src, page_url)
        if url is None or is_junk_image(url):
            continue
        images.setdefault(url, None)
    return list(images)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def _name_from_context(anchor: Tag) -> Optional[str]:
    """Name a generically labelled download link from its surroundings."""
    title = anchor.get("title")
    if title:
        return GENERIC_NAME_WORDS.sub("", title).strip()
    if anchor.parent is None:
        return None
    parent = clone(anchor.parent)
    remove_all(parent.select(FILE_NAME_PARENT_NOISE))
    text = text_of(parent)
    return text if len(text) > 3 else None


class _FileCollector:
    """Accumulates attachments, keeping the first entry per URL."""

    def __init__(self, page_url: str) -> None:
        self.page_url = page_url
        self.files: Dict[str, Attachment] = {}

    def resolve(self, anchor: Tag) -> Optional[str]:
        href = anchor.get("href")
        if is_skippable_href(href):
            return None
        return resolve_url(href, self.page_url)

    def accepts(self, anchor: Tag, url: str, name: str) -> bool:
        return url not in self.files and not is_noise_link(anchor, name, url)

    def add(self, anchor: Tag, url: str, name: str) -> None:
        if self.accepts(anchor, url, name):
            self.files[url] = Attachment(name=name or DEFAULT_FILE_NAME, url=url)

    def from_file_areas(self, soup: BeautifulSoup) -> None:
        for anchor in soup.select(FILE_AREA_SELECTOR):
            name = text_of(anchor)
            if not name:
                continue
            url = self.resolve(anchor)
            if url is None or not self.accepts(anchor, url, name):
                continue
            if name in GENERIC_FILE_NAMES:
                name = _name_from_context(anchor) or name
            self.files[url] = Attachment(name=name, url=url)

    def from_extensions(self, anchors: Iterable[Tag]) -> None:
        for anchor in anchors:
            url = self.resolve(anchor)
            if url is None or not has_file_extension(url):
                continue
            self.add(anchor, url, text_of(anchor))

    def from_attachment_labels(self, soup: BeautifulSoup) -> None:
        for label in soup.select(ATTACHMENT_LABEL_SELECTOR):
            if ATTACHMENT_LABEL not in label.get_text():
                continue
            sibling = label.find_next_sibling()
            if sibling is not None and sibling.name in ATTACHMENT_VALUE_TAGS:
                containers = [sibling]
            elif label.parent is not None:
                containers = [el for el in label.parent.select(ATTACHMENT_VALUE_SELECTOR) if el is not label]
            else:
                containers = []
            for container in containers:
                for anchor in container.find_all("a"):
                    url = self.resolve(anchor)
                    if url is not None:
                        self.add(anchor, url, text_of(anchor))


def extract_files(soup: BeautifulSoup, page_url: str) -> List[Attachment]:
    """Collect attachments with all three scans, de-duplicated by URL."""
    collector = _FileCollector(page_url)
    collector.from_file_areas(soup)
    collector.from_extensions(soup.find_all("a"))
    collector.from_attachment_labels(soup)
    return list(collector.files.values())


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------

def merge_file_images(images: List[str], files: Iterable[Attachment]) -> List[str]:
    """Fold image-like attachments into *images*.

    An attachment is skipped when it is junk, already listed verbatim, or
    shares an ID signature (``idx=``, ``fileNo=``, ``file_cn=``) with an
    image already listed: boards often expose one asset through both a
    view and a download endpoint.
    """
    merged = list(images)
    for attachment in files:
        url = attachment.url
        lowered = url.lower()
        if not IMAGE_FILE_URL.search(lowered) or is_junk_image(url):
            continue
        if url in merged:
            continue
        signature = id_signature(url)
        if signature and any(signature in existing.lower() for existing in merged):
            continue
        merged.append(url)
    return merged


def extract_media(soup: BeautifulSoup, page_url: str) -> Tuple[List[str], List[Attachment]]:
    """Return ``(images, files)`` for a detail page fetched from *page_url*."""
    images = extract_images(soup, page_url)
    files = extract_files(soup, page_url)
    return merge_file_images(images, files), files
