"""Tests for the 'scrape' CLI command."""

import json

from typer.testing import CliRunner

from cli.main import app
from postminer.errors import InvalidRequestError, ListingFetchError
from postminer.scraper.models import Attachment, DetailPost, ScrapeResult

runner = CliRunner()

_ARGS = ["scrape", "--url", "https://gov.example.kr/list", "--date", "2024-04-01"]


def _result():
    post = DetailPost(
        title="시설 점검 안내",
        link="https://gov.example.kr/view?id=1",
        date="2024-05-01",
        content="점검 일정 안내",
        files=[Attachment(name="안내문.hwp", url="https://gov.example.kr/down?fileNo=3")],
    )
    return ScrapeResult(posts=[post], next_page_url="https://gov.example.kr/list?page=2")


def _fake_scrape(calls):
    def fake(url, since, until=None, runner=None, with_details=True):
        calls.append({"url": url, "since": since, "until": until, "with_details": with_details})
        return _result()

    return fake


def test_scrape_prints_posts(monkeypatch):
    calls = []
    monkeypatch.setattr("cli.main.scrape_board", _fake_scrape(calls))

    result = runner.invoke(app, _ARGS)

    assert result.exit_code == 0
    assert "Posts  : 1" in result.stdout
    assert "1. [2024-05-01] 시설 점검 안내" in result.stdout
    assert "안내문.hwp" in result.stdout
    assert "https://gov.example.kr/list?page=2" in result.stdout
    assert calls == [{
        "url": "https://gov.example.kr/list",
        "since": "2024-04-01",
        "until": None,
        "with_details": True,
    }]


def test_scrape_json_output(monkeypatch):
    monkeypatch.setattr("cli.main.scrape_board", _fake_scrape([]))

    result = runner.invoke(app, _ARGS + ["--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["nextPageUrl"] == "https://gov.example.kr/list?page=2"
    assert payload["posts"][0]["title"] == "시설 점검 안내"


def test_scrape_no_details_and_date_end(monkeypatch):
    calls = []
    monkeypatch.setattr("cli.main.scrape_board", _fake_scrape(calls))

    result = runner.invoke(app, _ARGS + ["--date-end", "2024-05-31", "--no-details"])

    assert result.exit_code == 0
    assert calls[0]["until"] == "2024-05-31"
    assert calls[0]["with_details"] is False
    assert "files:" not in result.stdout


def test_scrape_invalid_request_exits_2(monkeypatch):
    def fake(*args, **kwargs):
        raise InvalidRequestError("Invalid date: 'soon'")

    monkeypatch.setattr("cli.main.scrape_board", fake)
    result = runner.invoke(app, _ARGS)
    assert result.exit_code == 2


def test_scrape_listing_failure_exits_1(monkeypatch):
    def fake(*args, **kwargs):
        raise ListingFetchError("https://gov.example.kr/list", "timed out")

    monkeypatch.setattr("cli.main.scrape_board", fake)
    result = runner.invoke(app, _ARGS)
    assert result.exit_code == 1


def test_render_empty():
    from cli.rendering import render_posts

    assert render_posts([]) == "(no posts)"
