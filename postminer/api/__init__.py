"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from postminer.api import app

    uvicorn postminer.api:app --reload
"""

from postminer.api.app import app

__all__ = ["app"]
