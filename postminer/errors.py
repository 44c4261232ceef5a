"""Exception hierarchy for the scraping pipeline.

Only request-level failures are exceptions.  Heuristics that find nothing
return ``None`` or empty values, and per-post detail failures are logged
and skipped by :mod:`postminer.scraper.detail`.
"""

from __future__ import annotations


class PostMinerError(Exception):
    """Base class for all PostMiner errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(PostMinerError):
    """The request is missing required fields or carries malformed values.

    Raised before any network access happens.
    """


class ListingFetchError(PostMinerError):
    """The listing page could not be fetched or parsed.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Failed to scrape listing {url!r}: {message}")
        self.url = url
