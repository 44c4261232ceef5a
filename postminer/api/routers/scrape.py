"""Scrape endpoint.

Routes
------
POST /scrape    Body: {"url": "https://...", "date": "YYYY-MM-DD", "dateEnd": "YYYY-MM-DD"?}

Responds with ``{"posts": [...], "nextPageUrl": ...}`` or ``{"error": "..."}``.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from postminer.errors import InvalidRequestError, ListingFetchError
from postminer.scraper.service import scrape_board

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ScrapeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Optional at the schema level so a missing field yields the
    # ``{"error": ...}`` shape instead of FastAPI's 422 body.
    url: Optional[str] = None
    date: Optional[str] = None
    date_end: Optional[str] = Field(default=None, alias="dateEnd")


class AttachmentOut(BaseModel):
    name: str
    url: str


class PostOut(BaseModel):
    title: str
    link: str
    date: str
    content: str
    images: list[str]
    files: list[AttachmentOut]


class ScrapeResponse(BaseModel):
    posts: list[PostOut]
    nextPageUrl: Optional[str] = None


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("", response_model=ScrapeResponse)
def scrape_endpoint(body: ScrapeRequest) -> Any:
    """Scrape a board listing page and the detail pages of its posts."""
    try:
        result = scrape_board(body.url, body.date, body.date_end)
    except InvalidRequestError as exc:
        return JSONResponse(status_code=400, content={"error": exc.message})
    except ListingFetchError as exc:
        print(f"[SCRAPE] ✗ {exc}")
        return JSONResponse(status_code=502, content={"error": exc.message})
    return result.to_dict()
