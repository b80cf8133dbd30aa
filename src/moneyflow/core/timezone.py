"""Clock and calendar-date helpers.

Timestamps are stored in UTC; transaction dates are plain calendar dates.
"""

from datetime import date, datetime
from typing import Union

import pytz
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

UTC = pytz.UTC


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return the current calendar date in UTC."""
    return now_utc().date()


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as UTC."""
    if dt.tzinfo is None:
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def parse_datetime_utc(value: Union[str, datetime]) -> datetime:
    """Parse an ISO-ish datetime string and return it in UTC."""
    if isinstance(value, datetime):
        return to_utc(value)
    return to_utc(date_parser.parse(value))


def parse_calendar_date(value: Union[str, date, datetime]) -> date:
    """
    Parse a calendar date.

    Accepts date objects, datetimes and strings with or without a time part
    ("2024-01-15", "2024-01-15T00:00:00Z"); the time part is dropped.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(value.strip()).date()


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last calendar day of the month containing ``day``."""
    first = day.replace(day=1)
    last = first + relativedelta(months=1, days=-1)
    return first, last
