from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from checklist_app.constants import DEFAULT_TIMEZONE


def resolve_timezone(timezone_name: str | None):
    try:
        return ZoneInfo(timezone_name or DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo("UTC")


def local_now(timezone_name: str | None = None) -> datetime:
    return datetime.now(resolve_timezone(timezone_name))


def local_today(timezone_name: str | None = None) -> date:
    return local_now(timezone_name).date()


def seconds_until_midnight(now: datetime) -> float:
    next_midnight = datetime.combine(now.date() + timedelta(days=1), datetime.min.time(), tzinfo=now.tzinfo)
    return max(0.0, (next_midnight - now).total_seconds())
