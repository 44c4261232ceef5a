"""End-to-end scrape request: listing page → posts → detail pages.

``scrape_board`` orchestrates the whole pipeline for one request:

    validate → fetch listing → extract rows → resolve next page
             → fetch each post (bounded, sequential by default)
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from urllib.parse import urlsplit

from postminer.errors import InvalidRequestError, ListingFetchError
from postminer.scraper.dates import parse_iso_date
from postminer.scraper.detail import Fetch, fetch_details
from postminer.scraper.dom import parse_html
from postminer.scraper.fetcher import fetch_url
from postminer.scraper.listing import extract_posts
from postminer.scraper.models import DetailPost, ListingResult, ScrapeResult
from postminer.scraper.pagination import resolve_pagination
from postminer.scraper.runner import Runner


def validate_request(
    url: Optional[str], target: Optional[str], end: Optional[str] = None
) -> tuple[str, date, Optional[date]]:
    """Check the request fields and parse its dates.

    Raises:
        InvalidRequestError: If ``url`` or ``date`` is missing, a date is
            not ISO formatted, or the URL is not http(s).
    """
    if not url or not target:
        raise InvalidRequestError("URL and Date are required")
    if urlsplit(url).scheme not in ("http", "https"):
        raise InvalidRequestError(f"Unsupported URL: {url!r}")

    target_date = parse_iso_date(target, "date")
    end_date = parse_iso_date(end, "dateEnd") if end else None
    if end_date is not None and end_date < target_date:
        raise InvalidRequestError("dateEnd must not be earlier than date")
    return url, target_date, end_date


def fetch_listing(
    url: str,
    target_date: date,
    end_date: Optional[date] = None,
    fetch: Fetch = fetch_url,
) -> ListingResult:
    """Fetch the listing page at *url* and extract its posts and next page.

    Raises:
        ListingFetchError: If the page cannot be fetched or parsed.
    """
    try:
        raw = fetch(url)
        soup = parse_html(raw.html)
        posts = extract_posts(soup, raw.url, target_date, end_date)
    except Exception as exc:
        raise ListingFetchError(url, str(exc)) from exc

    # Pagination is resolved against the requested URL so persistent query
    # parameters survive redirects that drop them.
    pagination = resolve_pagination(soup, url)
    print(
        f"[LISTING] {len(posts)} post(s) on/after {target_date.isoformat()} "
        f"(page {pagination.current_page}, next={pagination.next_url!r})"
    )
    return ListingResult(posts=posts, pagination=pagination)


def scrape_board(
    url: Optional[str],
    since: Optional[str],
    until: Optional[str] = None,
    fetch: Fetch = fetch_url,
    runner: Optional[Runner] = None,
    with_details: bool = True,
) -> ScrapeResult:
    """Scrape one listing page and the detail pages of its recent posts.

    Args:
        url: Listing page URL.
        since: Earliest post date to keep (ISO ``YYYY-MM-DD``).
        until: Optional latest post date to keep.
        fetch: HTTP fetch primitive; defaults to :func:`fetch_url`.
        runner: Task runner for the detail loop; defaults to one sized by
            ``settings.detail_concurrency``.
        with_details: When ``False`` only the listing is scraped and the
            posts carry empty content/images/files.

    Raises:
        InvalidRequestError: Bad or missing request fields (no fetch made).
        ListingFetchError: The listing page failed; no partial result.
    """
    url, target_date, end_date = validate_request(url, since, until)
    print(f"[SCRAPE] {url} (from {target_date.isoformat()})")

    listing = fetch_listing(url, target_date, end_date, fetch=fetch)
    if with_details:
        posts = fetch_details(listing.posts, fetch=fetch, runner=runner)
    else:
        posts = [DetailPost.from_summary(p) for p in listing.posts]

    return ScrapeResult(posts=posts, next_page_url=listing.pagination.next_url)
