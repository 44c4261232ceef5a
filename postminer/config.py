"""Runtime settings for PostMiner.

Every knob is read from the environment once, at import time.  A `.env`
file next to the package directory is loaded first; variables already set
in the process environment win over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP fetching
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )
    rate_limit_delay: float = field(
        default_factory=lambda: float(os.environ.get("RATE_LIMIT_DELAY", "0.5"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        )
    )
    render_spa: bool = field(default_factory=lambda: _env_bool("RENDER_SPA", "true"))

    # ------------------------------------------------------------------
    # Detail extraction
    # ------------------------------------------------------------------
    max_detail_posts: int = field(
        default_factory=lambda: int(os.environ.get("MAX_DETAIL_POSTS", "30"))
    )
    max_content_chars: int = field(
        default_factory=lambda: int(os.environ.get("MAX_CONTENT_CHARS", "5000"))
    )
    detail_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("DETAIL_CONCURRENCY", "1"))
    )


# Module-level singleton, import this everywhere:
#   from postminer.config import settings
settings = Settings()
