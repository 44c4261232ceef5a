"""Page fetching for board listings and post pages.

Plain httpx is tried first.  Boards that ship an empty JavaScript shell are
re-rendered in headless Chromium when ``settings.render_spa`` is on.
"""

from __future__ import annotations

import time

import httpx
from bs4 import UnicodeDammit

from postminer.config import settings
from postminer.scraper.models import RawPage
from postminer.scraper.rules import (
    ANY_TAG,
    SCRIPT_OR_STYLE_BLOCK,
    SPA_MAX_VISIBLE_CHARS,
    SPA_MIN_HTML_CHARS,
    SPA_SHELL_MARKERS,
)


def http_client() -> httpx.Client:
    """Return an httpx client carrying the configured UA and timeout."""
    return httpx.Client(
        headers={"User-Agent": settings.user_agent},
        timeout=settings.request_timeout,
        follow_redirects=True,
    )


def _is_spa(html: str) -> bool:
    """``True`` when *html* looks like a JS shell whose content is rendered client-side.

    Framework markers only count when the page is also nearly empty:
    server-rendered Next.js/Nuxt boards already carry their listing.
    """
    visible = ANY_TAG.sub("", SCRIPT_OR_STYLE_BLOCK.sub("", html)).strip()
    if len(visible) >= SPA_MAX_VISIBLE_CHARS:
        return False
    return bool(SPA_SHELL_MARKERS.search(html)) or len(html) > SPA_MIN_HTML_CHARS


def _decode(response: httpx.Response) -> str:
    """Decode the body, sniffing ``<meta charset>`` when the header has none.

    Many Korean boards serve EUC-KR without declaring it in Content-Type.
    """
    if response.charset_encoding:
        return response.text
    markup = UnicodeDammit(response.content, is_html=True).unicode_markup
    return markup or response.text


def _fetch_with_playwright(url: str) -> RawPage:
    """Render *url* in headless Chromium and return the settled DOM.

    Imported lazily: only boards that need rendering require a browser.
    """
    from playwright.sync_api import sync_playwright  # noqa: PLC0415

    with sync_playwright() as pw:
        browser = pw.chromium.launch(headless=True)
        try:
            page = browser.new_page(user_agent=settings.user_agent)
            response = page.goto(
                url,
                timeout=int(settings.request_timeout * 1000),
                wait_until="networkidle",
            )
            return RawPage(
                url=page.url,
                html=page.content(),
                status_code=response.status if response is not None else 200,
            )
        finally:
            browser.close()


def fetch_url(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    Sleeps ``settings.rate_limit_delay`` first so sequential crawls stay
    polite.  ``RawPage.url`` is the final URL after redirects.  When the
    Playwright render of a script shell fails, the plain response is kept.

    Raises:
        httpx.HTTPError: On network failures, timeouts and 4xx/5xx statuses.
    """
    if settings.rate_limit_delay > 0:
        time.sleep(settings.rate_limit_delay)

    with http_client() as client:
        response = client.get(url)
        response.raise_for_status()
        raw = RawPage(url=str(response.url), html=_decode(response), status_code=response.status_code)

    if settings.render_spa and _is_spa(raw.html):
        print(f"[FETCH] {url!r} looks script-rendered; rendering with Playwright")
        try:
            raw = _fetch_with_playwright(url)
        except Exception as exc:
            print(f"[FETCH] ✗ Rendering {url!r} failed, keeping the plain response: {exc}")
    return raw
