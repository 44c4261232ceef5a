"""Scraper package: listing rows, pagination and post detail extraction."""

from postminer.scraper.detail import extract_detail, fetch_details
from postminer.scraper.fetcher import fetch_url
from postminer.scraper.listing import extract_posts
from postminer.scraper.models import (
    Attachment,
    DetailPost,
    ListingResult,
    PaginationState,
    PostSummary,
    RawPage,
    ScrapeResult,
)
from postminer.scraper.pagination import resolve_pagination
from postminer.scraper.service import fetch_listing, scrape_board

__all__ = [
    "fetch_url",
    "extract_posts",
    "resolve_pagination",
    "extract_detail",
    "fetch_details",
    "fetch_listing",
    "scrape_board",
    "RawPage",
    "PostSummary",
    "Attachment",
    "DetailPost",
    "PaginationState",
    "ListingResult",
    "ScrapeResult",
]
