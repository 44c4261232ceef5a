"""Tests for the HTTP API endpoints.

``scrape_board`` is patched where the router imports it, and ``respx``
intercepts the image proxy's upstream requests.  No network calls are made.
"""

from __future__ import annotations

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from postminer.api.app import create_app
from postminer.errors import InvalidRequestError, ListingFetchError
from postminer.scraper.models import Attachment, DetailPost, ScrapeResult


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client():
    with TestClient(create_app(), raise_server_exceptions=True) as c:
        yield c


def _result() -> ScrapeResult:
    post = DetailPost(
        title="시설 점검 안내",
        link="https://gov.example.kr/view?id=1",
        date="2024-05-01",
        content="점검 일정 안내",
        images=["https://gov.example.kr/img/a.png"],
        files=[Attachment(name="안내문.hwp", url="https://gov.example.kr/down?fileNo=3")],
    )
    return ScrapeResult(posts=[post], next_page_url="https://gov.example.kr/list?page=2")


# ---------------------------------------------------------------------------
# /scrape
# ---------------------------------------------------------------------------

class TestScrapeEndpoint:
    def test_success_shape(self, client, monkeypatch):
        calls = []

        def fake_scrape(url, since, until=None):
            calls.append((url, since, until))
            return _result()

        monkeypatch.setattr("postminer.api.routers.scrape.scrape_board", fake_scrape)
        resp = client.post(
            "/scrape",
            json={"url": "https://gov.example.kr/list", "date": "2024-04-01", "dateEnd": "2024-05-31"},
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["nextPageUrl"] == "https://gov.example.kr/list?page=2"
        assert body["posts"][0]["title"] == "시설 점검 안내"
        assert body["posts"][0]["files"] == [
            {"name": "안내문.hwp", "url": "https://gov.example.kr/down?fileNo=3"}
        ]
        assert calls == [("https://gov.example.kr/list", "2024-04-01", "2024-05-31")]

    def test_missing_fields_is_400(self, client):
        resp = client.post("/scrape", json={"date": "2024-04-01"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "URL and Date are required"}

    def test_invalid_request_is_400(self, client, monkeypatch):
        def fake_scrape(url, since, until=None):
            raise InvalidRequestError("Invalid date: 'soon'")

        monkeypatch.setattr("postminer.api.routers.scrape.scrape_board", fake_scrape)
        resp = client.post("/scrape", json={"url": "https://gov.example.kr/list", "date": "soon"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid date: 'soon'"}

    def test_listing_failure_is_502(self, client, monkeypatch):
        def fake_scrape(url, since, until=None):
            raise ListingFetchError(url, "timed out")

        monkeypatch.setattr("postminer.api.routers.scrape.scrape_board", fake_scrape)
        resp = client.post("/scrape", json={"url": "https://gov.example.kr/list", "date": "2024-04-01"})
        assert resp.status_code == 502
        assert "timed out" in resp.json()["error"]

    def test_no_posts(self, client, monkeypatch):
        monkeypatch.setattr(
            "postminer.api.routers.scrape.scrape_board",
            lambda url, since, until=None: ScrapeResult(posts=[], next_page_url=None),
        )
        resp = client.post("/scrape", json={"url": "https://gov.example.kr/list", "date": "2024-04-01"})
        assert resp.status_code == 200
        assert resp.json() == {"posts": [], "nextPageUrl": None}


# ---------------------------------------------------------------------------
# /proxy-image
# ---------------------------------------------------------------------------

class TestProxyImage:
    _IMG = "https://gov.example.kr/upload/photo.png"

    def test_relays_bytes_and_headers(self, client):
        with respx.mock:
            respx.get(self._IMG).mock(
                return_value=httpx.Response(
                    200, content=b"\x89PNG", headers={"Content-Type": "image/png"}
                )
            )
            resp = client.get("/proxy-image", params={"url": self._IMG})

        assert resp.status_code == 200
        assert resp.content == b"\x89PNG"
        assert resp.headers["content-type"] == "image/png"
        assert resp.headers["cache-control"] == "public, max-age=31536000"
        assert resp.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("value", [None, "", "undefined", "null"])
    def test_missing_url_is_400(self, client, value):
        params = {} if value is None else {"url": value}
        resp = client.get("/proxy-image", params=params)
        assert resp.status_code == 400
        assert resp.text == "URL key is required"

    def test_upstream_status_is_relayed(self, client):
        with respx.mock:
            respx.get(self._IMG).mock(return_value=httpx.Response(404))
            resp = client.get("/proxy-image", params={"url": self._IMG})
        assert resp.status_code == 404

    def test_network_error_is_500(self, client):
        with respx.mock:
            respx.get(self._IMG).mock(side_effect=httpx.ConnectError("refused"))
            resp = client.get("/proxy-image", params={"url": self._IMG})
        assert resp.status_code == 500
        assert resp.text == "Failed to fetch image"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
