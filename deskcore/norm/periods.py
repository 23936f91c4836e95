import calendar
import logging
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from pydantic import BaseModel

from .dates import align, parse_instant
from .resolver import resolve

LOG = logging.getLogger(__name__)


class PeriodLabel(str, Enum):
    TODAY = "Today"
    THIS_WEEK = "This Week"
    LAST_MONTH = "Last Month"
    LAST_6_MONTHS = "Last 6 Months"
    LAST_YEAR = "Last Year"
    ALL_TIME = "All time"


DEFAULT_DATE_FIELDS: tuple[str, ...] = (
    "created_at",
    "date",
    "formatted_date",
    "order_date",
    "last_message_at",
    "chat_date",
)

_MONTHS_BACK = {
    PeriodLabel.LAST_MONTH: 1,
    PeriodLabel.LAST_6_MONTHS: 6,
    PeriodLabel.LAST_YEAR: 12,
}

_API_PERIODS = {
    "Today": "today",
    "This Week": "this_week",
    "This Month": "this_month",
    "Last Month": "last_month",
    "This Year": "this_year",
    "Last Year": "this_year",
}


class PeriodWindow(BaseModel):
    """Inclusive ``[start, end]`` range; ``None`` means unbounded on that side."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, instant: datetime) -> bool:
        if self.start is not None and align(instant, self.start) < self.start:
            return False
        if self.end is not None and align(instant, self.end) > self.end:
            return False
        return True


def coerce_period(label: Any) -> PeriodLabel:
    if isinstance(label, PeriodLabel):
        return label
    text = str(label or "").strip()
    if not text:
        return PeriodLabel.ALL_TIME
    for member in PeriodLabel:
        if member.value.lower() == text.lower():
            return member
    LOG.warning("unknown period label %r, treating as All time", label)
    return PeriodLabel.ALL_TIME


def _shift_months(moment: datetime, months: int) -> datetime:
    total = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day, hour=0, minute=0, second=0, microsecond=0)


def window_for(label: Any, now: Optional[datetime] = None) -> PeriodWindow:
    period = coerce_period(label)
    if period is PeriodLabel.ALL_TIME:
        return PeriodWindow()

    now = now or datetime.now()
    if period is PeriodLabel.TODAY:
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    elif period is PeriodLabel.THIS_WEEK:
        start = now - timedelta(days=7)
    else:
        start = _shift_months(now, _MONTHS_BACK[period])
    return PeriodWindow(start=start, end=now)


def _is_date_only(value: Any) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    text = str(value)
    return "T" not in text and ":" not in text


def window_between(date_from: Any, date_to: Any) -> PeriodWindow:
    """Explicit range picked in the dashboard's custom date filter.

    A date-only ``date_to`` covers that whole day. When either end is missing
    or unparseable the range is ignored and the window is unbounded.
    """
    start = parse_instant(date_from)
    end = parse_instant(date_to)
    if start is None or end is None:
        if date_from or date_to:
            LOG.warning("ignoring incomplete date range %r..%r", date_from, date_to)
        return PeriodWindow()
    if _is_date_only(date_to):
        end = end.replace(hour=23, minute=59, second=59, microsecond=999999)
    return PeriodWindow(start=start, end=end)


def filter_by_period(
    records: Iterable[Any],
    label: Any,
    date_fields: Sequence[str] = DEFAULT_DATE_FIELDS,
    now: Optional[datetime] = None,
    date_from: Any = None,
    date_to: Any = None,
) -> list[Any]:
    """Keep records whose first resolvable date falls inside the period.

    A named period wins; with "All time" (or no label) a ``date_from``/``date_to``
    pair narrows the result instead. Records without a parseable date are
    dropped, except when the window is unbounded and every record is returned.
    """
    records = list(records)
    period = coerce_period(label)
    if period is PeriodLabel.ALL_TIME and (date_from or date_to):
        window = window_between(date_from, date_to)
        scope = f"{date_from}..{date_to}"
    else:
        window = window_for(period, now)
        scope = period.value
    if window.unbounded:
        return records

    kept = []
    for record in records:
        instant = parse_instant(resolve(record, date_fields))
        if instant is None:
            LOG.debug("excluding record without a usable date from %s", scope)
            continue
        if window.contains(instant):
            kept.append(record)
    return kept


def map_period_to_api(label: Any) -> Optional[str]:
    """Translate a dashboard period label into the backend's ``period`` query value."""
    text = label.value if isinstance(label, Enum) else str(label or "").strip()
    if not text or text == PeriodLabel.ALL_TIME.value:
        return None
    return _API_PERIODS.get(text)
