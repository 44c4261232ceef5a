"""PostMiner CLI entry-point for scraping and serving.

Usage:
    python cli/main.py --help

Commands:
    scrape    → scrape one board listing page (and its posts)
    serve     → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from postminer.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
from typing import Optional

import typer

from postminer.config import settings
from postminer.errors import InvalidRequestError, ListingFetchError
from postminer.scraper.runner import make_runner
from postminer.scraper.service import scrape_board

from cli.rendering import render_posts

app = typer.Typer(
    name="postminer",
    help="PostMiner: generic bulletin-board post extraction.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="Board listing page URL."),
    date: str = typer.Option(..., help="Earliest post date to keep (YYYY-MM-DD)."),
    date_end: Optional[str] = typer.Option(None, "--date-end", help="Latest post date to keep."),
    details: bool = typer.Option(True, "--details/--no-details", help="Fetch each post's detail page."),
    workers: int = typer.Option(
        settings.detail_concurrency, "--workers", min=1, help="Concurrent detail fetches."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON result."),
) -> None:
    """Scrape a listing page and print the posts found on it."""
    if not as_json:
        typer.echo(f"[scrape] Fetching {url!r} …")
    try:
        result = scrape_board(
            url,
            date,
            date_end,
            runner=make_runner(workers),
            with_details=details,
        )
    except InvalidRequestError as exc:
        typer.echo(f"[scrape] ✗ {exc}", err=True)
        raise typer.Exit(2)
    except ListingFetchError as exc:
        typer.echo(f"[scrape] ✗ {exc}", err=True)
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    typer.echo(f"[scrape] Posts  : {len(result.posts)}")
    typer.echo(f"[scrape] Next   : {result.next_page_url or '(none)'}")
    typer.echo("")
    typer.echo(render_posts(result.posts, with_content=details))


# ---------------------------------------------------------------------------
# Serve
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8000, help="Bind port."),
    reload: bool = typer.Option(False, help="Auto-reload on code changes."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("postminer.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
