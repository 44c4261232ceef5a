"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, List, Optional


@dataclass
class RawPage:
    """The raw HTTP response for a single URL fetch.

    ``url`` doubles as the base URL for resolving relative links.
    """

    url: str
    html: str
    status_code: int


@dataclass
class PostSummary:
    """One post row found on a listing page."""

    title: str
    link: str
    date: str  # YYYY-MM-DD


@dataclass
class Attachment:
    name: str
    url: str


@dataclass
class DetailPost:
    """A :class:`PostSummary` enriched with its detail page contents."""

    title: str
    link: str
    date: str
    content: str = ""
    images: List[str] = field(default_factory=list)
    files: List[Attachment] = field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: PostSummary, **kwargs: Any) -> "DetailPost":
        return cls(title=summary.title, link=summary.link, date=summary.date, **kwargs)


@dataclass
class PaginationState:
    current_page: int = 1
    next_url: Optional[str] = None


@dataclass
class ListingResult:
    posts: List[PostSummary]
    pagination: PaginationState


@dataclass
class ScrapeResult:
    """Final output of one scrape request."""

    posts: List[DetailPost]
    next_page_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Render the wire shape consumed by downstream tooling."""
        return {
            "posts": [asdict(p) for p in self.posts],
            "nextPageUrl": self.next_page_url,
        }
