"""Plain-text rendering of scrape results for the CLI."""

from __future__ import annotations

from typing import List

from postminer.scraper.models import DetailPost

_PREVIEW_CHARS = 200


def _preview(content: str) -> str:
    flat = " ".join(content.split())
    if len(flat) <= _PREVIEW_CHARS:
        return flat
    return flat[:_PREVIEW_CHARS].rstrip() + " …"


def render_posts(posts: List[DetailPost], with_content: bool = True) -> str:
    """Render *posts* as an indented, numbered list.

    Example::

        1. [2024-05-01] 공지사항 제목
           https://example.com/view?id=1
           본문 미리보기 …
           images: 2  files: 1
           - 보고서.pdf  https://example.com/down?fileNo=3
    """
    if not posts:
        return "(no posts)"

    lines: List[str] = []
    for i, post in enumerate(posts, start=1):
        lines.append(f"{i}. [{post.date}] {post.title}")
        lines.append(f"   {post.link}")
        if with_content:
            if post.content:
                lines.append(f"   {_preview(post.content)}")
            lines.append(f"   images: {len(post.images)}  files: {len(post.files)}")
            for f in post.files:
                lines.append(f"   - {f.name}  {f.url}")
    return "\n".join(lines)
