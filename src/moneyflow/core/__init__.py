"""Core utilities and shared functionality."""

from moneyflow.core.timezone import (
    now_utc,
    today_utc,
    to_utc,
    parse_datetime_utc,
    parse_calendar_date,
    month_bounds,
    UTC,
)
from moneyflow.core.exceptions import (
    AppError,
    ValidationError,
    InvalidAmountError,
    NotFoundError,
    StoreError,
    MalformedSnapshotError,
)

__all__ = [
    "now_utc",
    "today_utc",
    "to_utc",
    "parse_datetime_utc",
    "parse_calendar_date",
    "month_bounds",
    "UTC",
    "AppError",
    "ValidationError",
    "InvalidAmountError",
    "NotFoundError",
    "StoreError",
    "MalformedSnapshotError",
]
