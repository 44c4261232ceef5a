"""Date recognition for listing rows and request parameters."""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from postminer.errors import InvalidRequestError

_ABSOLUTE_DATE = re.compile(r"(\d{4})[-.](\d{2})[-.](\d{2})")
# Whole-string clock only, so digit pairs inside unrelated text never match.
_CLOCK_ONLY = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def parse_date(text: str, today: Optional[date] = None) -> Optional[date]:
    """Recognise a calendar date in *text*.

    ``YYYY-MM-DD`` / ``YYYY.MM.DD`` anywhere in the text wins; otherwise a
    bare ``HH:MM[:SS]`` clock means the post was written *today*.  Returns
    ``None`` when nothing matches, including impossible dates such as
    ``2024-13-40``.
    """
    if not text:
        return None

    match = _ABSOLUTE_DATE.search(text)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None

    clock = _CLOCK_ONLY.match(text.strip())
    if clock:
        hour, minute, second = int(clock.group(1)), int(clock.group(2)), int(clock.group(3) or 0)
        if hour < 24 and minute < 60 and second < 60:
            return today or date.today()
    return None


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse a caller-supplied ISO date (``YYYY-MM-DD`` with optional time).

    Raises:
        InvalidRequestError: If *value* is not an ISO date.
    """
    try:
        return date.fromisoformat(value.strip()[:10])
    except (AttributeError, ValueError) as exc:
        raise InvalidRequestError(f"Invalid {field_name}: {value!r}") from exc
