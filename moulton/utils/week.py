from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

from moulton.core.settings import settings

ISSUE_WEEKDAY = 0  # Monday=0 .. Sunday=6


def days_until_next_issue(today: date) -> int:
    """Whole days until the next Monday, wrapped to 0..6 (0 on a Monday)."""
    return (ISSUE_WEEKDAY - today.weekday()) % 7


def local_today(tz: ZoneInfo | None = None) -> date:
    tz = tz or ZoneInfo(settings.NEWSLETTER_TZ)
    return datetime.now(tz).date()
