import logging
import re
from datetime import date, datetime, time, timezone
from typing import Any, Optional

LOG = logging.getLogger(__name__)

# Backend display format: "26-12-2025/08:10PM", the time part is optional.
DISPLAY_RE = re.compile(
    r"""
    ^\s*
    (?P<day>\d{1,2})-(?P<month>\d{1,2})-(?P<year>\d{4})
    (?:\s*/\s*
        (?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<meridiem>[AaPp][Mm])?
    )?
    \s*$
    """,
    re.VERBOSE,
)


def _parse_display(raw: str) -> Optional[datetime]:
    m = DISPLAY_RE.match(raw)
    if not m:
        return None

    hour = int(m.group("hour") or 0)
    minute = int(m.group("minute") or 0)
    meridiem = (m.group("meridiem") or "").upper()
    if meridiem == "PM" and hour < 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0
    try:
        return datetime(
            int(m.group("year")),
            int(m.group("month")),
            int(m.group("day")),
            hour,
            minute,
        )
    except ValueError:
        return None


def _parse_iso(raw: str) -> Optional[datetime]:
    s = raw.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def parse_instant(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None

    parsed = _parse_iso(value) or _parse_display(value)
    if parsed is None:
        LOG.debug("unparseable date value %r", value)
    return parsed


def align(instant: datetime, now: datetime) -> datetime:
    """Make ``instant`` comparable with ``now``.

    Naive instants take ``now``'s tzinfo; aware ones compared against a naive
    ``now`` are read as UTC wall time.
    """
    if now.tzinfo is None:
        if instant.tzinfo is None:
            return instant
        return instant.astimezone(timezone.utc).replace(tzinfo=None)
    if instant.tzinfo is None:
        return instant.replace(tzinfo=now.tzinfo)
    return instant
