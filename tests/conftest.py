"""Shared fixtures for the PostMiner test-suite."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _no_delay_no_browser(monkeypatch):
    """Never sleep between fetches and never launch Playwright in tests."""
    monkeypatch.setattr("postminer.config.settings.rate_limit_delay", 0.0)
    monkeypatch.setattr("postminer.config.settings.render_spa", False)
