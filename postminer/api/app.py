"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under their respective path prefix:

    /scrape       listing + detail extraction for one board page
    /proxy-image  image relay for browser clients
    /health       liveness check
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postminer import __version__
from postminer.api.routers import proxy as proxy_router
from postminer.api.routers import scrape as scrape_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="PostMiner API",
        description=(
            "Generic bulletin-board extraction: finds post rows on a listing "
            "page, resolves the next page and extracts each post's body text, "
            "images and attachments."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(scrape_router.router, prefix="/scrape", tags=["scrape"])
    app.include_router(proxy_router.router, prefix="/proxy-image", tags=["proxy"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn postminer.api.app:app --reload
app = create_app()
