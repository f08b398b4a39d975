from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_KEY_FORMAT, MARKED_AT_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def date_key(value: date) -> str:
    """Store key for a calendar date, e.g. 'Mon Jan 01 2024'."""
    return value.strftime(DATE_KEY_FORMAT)


def parse_date_key(value: str) -> date:
    return datetime.strptime(value, DATE_KEY_FORMAT).date()


def format_marked_at(value: datetime) -> str:
    return value.strftime(MARKED_AT_FORMAT)


def parse_marked_at(value: str) -> Optional[datetime]:
    """Parse a stored mark time; None when the text is not in the expected format."""
    try:
        return datetime.strptime(value, MARKED_AT_FORMAT)
    except (TypeError, ValueError):
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
