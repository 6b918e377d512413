"""ISO-8601 UTC timestamps as the API renders them (``...T10:00:00.000Z``)."""

from datetime import datetime, timezone
from typing import Optional


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    rendered = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return rendered.replace("+00:00", "Z")


def utc_now_iso() -> str:
    return isoformat(datetime.now(timezone.utc))
