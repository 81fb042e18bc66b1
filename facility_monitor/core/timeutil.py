from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from .config import settings

STAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_local(tz: Optional[str] = None) -> datetime:
    return now_utc().astimezone(ZoneInfo(tz or settings.timezone))


def stamp(dt: datetime) -> str:
    """Render a capture timestamp the way the audit log prints it."""
    return dt.strftime(STAMP_FORMAT)
