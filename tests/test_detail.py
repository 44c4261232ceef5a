"""Tests for the task runner and the per-post detail loop."""

from __future__ import annotations

import threading
import time

import httpx
import pytest

from postminer.scraper.detail import extract_detail, fetch_details
from postminer.scraper.models import Attachment, DetailPost, PostSummary, RawPage
from postminer.scraper.runner import make_runner, run_sequential

_DETAIL_HTML = """\
<html><body>
<div class="view_cont"><p>행사 일정 안내</p><p>많은 참여 바랍니다.</p>
<img src="/upload/event.jpg"></div>
<div class="file_area"><a href="/down.do?fileNo=5" title="일정표.hwp">다운로드</a></div>
</body></html>
"""


def _summary(i: int) -> PostSummary:
    return PostSummary(title=f"글 {i}", link=f"https://board.example.kr/view?id={i}", date="2024-05-01")


def _fake_fetch(pages: dict[str, str]):
    calls: list[str] = []

    def fetch(url: str) -> RawPage:
        calls.append(url)
        if url not in pages:
            raise httpx.ConnectError("connection refused")
        return RawPage(url=url, html=pages[url], status_code=200)

    fetch.calls = calls  # type: ignore[attr-defined]
    return fetch


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

class TestRunner:
    def test_sequential_preserves_order_and_captures_errors(self) -> None:
        def fail() -> int:
            raise ValueError("bad")

        outcomes = run_sequential([lambda: 1, fail, lambda: 3])
        assert outcomes[0] == 1
        assert isinstance(outcomes[1], ValueError)
        assert outcomes[2] == 3

    def test_width_one_is_sequential(self) -> None:
        assert make_runner(1) is run_sequential
        assert make_runner(0) is run_sequential

    def test_pooled_runner_preserves_order(self) -> None:
        def slow(value: int, delay: float):
            def task() -> int:
                time.sleep(delay)
                return value
            return task

        runner = make_runner(3)
        assert runner([slow(1, 0.05), slow(2, 0.0), slow(3, 0.01)]) == [1, 2, 3]

    def test_pooled_runner_is_bounded(self) -> None:
        active = 0
        peak = 0
        lock = threading.Lock()

        def task() -> None:
            nonlocal active, peak
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.02)
            with lock:
                active -= 1

        make_runner(2)([task] * 6)
        assert peak <= 2


# ---------------------------------------------------------------------------
# Detail extraction
# ---------------------------------------------------------------------------

class TestExtractDetail:
    def test_builds_detail_post(self) -> None:
        summary = _summary(1)
        raw = RawPage(url=summary.link, html=_DETAIL_HTML, status_code=200)
        post = extract_detail(summary, raw)

        assert isinstance(post, DetailPost)
        assert post.title == summary.title
        assert post.content == "행사 일정 안내\n많은 참여 바랍니다."
        assert post.images == ["https://board.example.kr/upload/event.jpg"]
        assert post.files == [
            Attachment(name="일정표.hwp", url="https://board.example.kr/down.do?fileNo=5")
        ]

    def test_content_truncated(self) -> None:
        summary = _summary(1)
        html = f'<div class="view_cont"><p>{"가" * 100}</p></div>'
        post = extract_detail(summary, RawPage(url=summary.link, html=html, status_code=200), max_chars=10)
        assert post.content == "가" * 10

    def test_default_truncation_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("postminer.config.settings.max_content_chars", 5)
        summary = _summary(1)
        html = f'<div class="view_cont"><p>{"나" * 100}</p></div>'
        post = extract_detail(summary, RawPage(url=summary.link, html=html, status_code=200))
        assert len(post.content) == 5


class TestFetchDetails:
    def test_failed_post_is_omitted(self) -> None:
        posts = [_summary(1), _summary(2), _summary(3)]
        fetch = _fake_fetch({posts[0].link: _DETAIL_HTML, posts[2].link: _DETAIL_HTML})

        detailed = fetch_details(posts, fetch=fetch)

        assert [p.link for p in detailed] == [posts[0].link, posts[2].link]
        assert fetch.calls == [p.link for p in posts]

    def test_extraction_error_is_isolated(self, monkeypatch: pytest.MonkeyPatch) -> None:
        posts = [_summary(1), _summary(2)]
        fetch = _fake_fetch({p.link: _DETAIL_HTML for p in posts})
        real = extract_detail

        def flaky(summary, raw, max_chars=None):
            if summary.link == posts[0].link:
                raise AttributeError("unexpected markup")
            return real(summary, raw, max_chars)

        monkeypatch.setattr("postminer.scraper.detail.extract_detail", flaky)
        detailed = fetch_details(posts, fetch=fetch)
        assert [p.link for p in detailed] == [posts[1].link]

    def test_only_first_thirty_posts_visited(self) -> None:
        posts = [_summary(i) for i in range(35)]
        fetch = _fake_fetch({p.link: '<div class="view_cont">본문</div>' for p in posts})

        detailed = fetch_details(posts, fetch=fetch)

        assert len(detailed) == 30
        assert len(fetch.calls) == 30

    def test_explicit_limit(self) -> None:
        posts = [_summary(i) for i in range(5)]
        fetch = _fake_fetch({p.link: '<div class="view_cont">본문</div>' for p in posts})
        assert len(fetch_details(posts, fetch=fetch, limit=2)) == 2

    def test_injected_runner_used(self) -> None:
        posts = [_summary(1), _summary(2)]
        fetch = _fake_fetch({p.link: _DETAIL_HTML for p in posts})
        seen: list[int] = []

        def runner(tasks):
            tasks = list(tasks)
            seen.append(len(tasks))
            return run_sequential(tasks)

        detailed = fetch_details(posts, fetch=fetch, runner=runner)
        assert seen == [2]
        assert len(detailed) == 2

    def test_pooled_runner_keeps_listing_order(self) -> None:
        posts = [_summary(i) for i in range(6)]
        fetch = _fake_fetch({p.link: _DETAIL_HTML for p in posts})
        detailed = fetch_details(posts, fetch=fetch, runner=make_runner(3))
        assert [p.link for p in detailed] == [p.link for p in posts]
