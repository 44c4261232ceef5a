"""Image proxy so browser clients can display board images.

Routes
------
GET /proxy-image?url=<image url>

Many boards block hot-linking or omit CORS headers; the proxy re-serves
the bytes with a long cache lifetime and an open CORS header.
"""

from __future__ import annotations

from typing import Optional

import httpx
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response

from postminer.scraper.fetcher import http_client

router = APIRouter()


@router.get("")
def proxy_image(url: Optional[str] = None) -> Response:
    """Fetch *url* and relay its body and content type."""
    if not url or url in ("undefined", "null"):
        return PlainTextResponse("URL key is required", status_code=400)

    try:
        with http_client() as client:
            upstream = client.get(url)
    except httpx.HTTPError as exc:
        print(f"[PROXY] ✗ {url!r}: {exc}")
        return PlainTextResponse("Failed to fetch image", status_code=500)

    if not upstream.is_success:
        return PlainTextResponse(
            f"Failed to fetch image: {upstream.status_code}",
            status_code=upstream.status_code,
        )

    return Response(
        content=upstream.content,
        media_type=upstream.headers.get("Content-Type", "image/jpeg"),
        headers={
            "Cache-Control": "public, max-age=31536000",
            "Access-Control-Allow-Origin": "*",
        },
    )
