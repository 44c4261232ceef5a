"""Per-post detail retrieval: content, images and attachments."""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Sequence

from postminer.config import settings
from postminer.scraper.content import extract_text
from postminer.scraper.dom import parse_html
from postminer.scraper.fetcher import fetch_url
from postminer.scraper.media import extract_media
from postminer.scraper.models import DetailPost, PostSummary, RawPage
from postminer.scraper.runner import Runner, Task, make_runner
from postminer.scraper.sanitizer import sanitize

Fetch = Callable[[str], RawPage]


def extract_detail(summary: PostSummary, raw: RawPage, max_chars: Optional[int] = None) -> DetailPost:
    """Build a :class:`DetailPost` from a fetched detail page.

    Images and attachment links resolve against the post's own URL, not
    the listing's.
    """
    limit = settings.max_content_chars if max_chars is None else max_chars
    soup = parse_html(raw.html)
    content = sanitize(extract_text(soup, html=raw.html, url=raw.url))[:limit]
    images, files = extract_media(soup, summary.link)
    return DetailPost.from_summary(summary, content=content, images=images, files=files)


def detail_tasks(posts: Sequence[PostSummary], fetch: Fetch) -> Iterator[Task]:
    """Yield one fetch-and-extract task per post."""
    for post in posts:
        def task(post: PostSummary = post) -> DetailPost:
            return extract_detail(post, fetch(post.link))

        yield task


def fetch_details(
    posts: Sequence[PostSummary],
    fetch: Fetch = fetch_url,
    runner: Optional[Runner] = None,
    limit: Optional[int] = None,
) -> List[DetailPost]:
    """Fetch and extract the detail page of each post.

    Only the first *limit* posts (``settings.max_detail_posts`` by default)
    are visited.  A post whose fetch or extraction fails is logged and left
    out; the rest of the batch carries on.  Output order follows *posts*.
    """
    limit = settings.max_detail_posts if limit is None else limit
    runner = runner or make_runner(settings.detail_concurrency)
    batch = list(posts[:limit])

    detailed: List[DetailPost] = []
    for post, outcome in zip(batch, runner(detail_tasks(batch, fetch))):
        if isinstance(outcome, Exception):
            print(f"[DETAIL] ✗ Failed {post.link!r}: {outcome}")
            continue
        print(f"[DETAIL] ✓ {post.title!r} ({len(outcome.images)} image(s), {len(outcome.files)} file(s))")
        detailed.append(outcome)
    return detailed
