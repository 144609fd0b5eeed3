"""Month parsing, range resolution and timestamp formatting utilities."""

import re
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

# YYYY-MM (e.g. 2026-01)
ISO_MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
# MM-YYYY (e.g. 01-2026)
ALT_MONTH_PATTERN = re.compile(r"^(0[1-9]|1[0-2])-(\d{4})$")


class MonthRange(BaseModel):
    """Inclusive UTC instant range covering one calendar month."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., description="Calendar year")
    month: int = Field(..., ge=1, le=12, description="Calendar month (1-12)")
    start_date: datetime = Field(
        ..., description="First instant of the month (UTC midnight of day 1)"
    )
    end_date: datetime = Field(
        ..., description="Last instant of the month (23:59:59.999 UTC)"
    )

    def contains(self, moment: datetime | None) -> bool:
        """Check whether a timestamp falls inside the range, bounds included."""
        if moment is None:
            return False
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return self.start_date <= moment <= self.end_date

    def to_filter(self) -> dict[str, str]:
        """Render the range as a Linear date comparator (``gte``/``lte``)."""
        return {
            "gte": format_api_timestamp(self.start_date),
            "lte": format_api_timestamp(self.end_date),
        }


def get_month_range(year: int, month: int) -> MonthRange:
    """Get the inclusive UTC range for a calendar month.

    The last day is found by stepping back one day from the first day of the
    following month, which yields 28/29 for February and 30/31 elsewhere.

    Args:
        year: Calendar year
        month: Calendar month (1-12), already validated by the caller

    Returns:
        MonthRange spanning the whole month
    """
    start_date = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        next_month_start = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        next_month_start = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    last_day = next_month_start - timedelta(days=1)
    end_date = last_day.replace(hour=23, minute=59, second=59, microsecond=999000)

    return MonthRange(year=year, month=month, start_date=start_date, end_date=end_date)


def parse_month_string(value: str) -> tuple[int, int]:
    """Parse a month string into (year, month).

    Supports:
    - YYYY-MM: 2026-01
    - MM-YYYY: 01-2026

    Raises:
        ValueError: If the string matches neither format
    """
    iso_match = ISO_MONTH_PATTERN.match(value)
    if iso_match:
        return int(iso_match.group(1)), int(iso_match.group(2))

    alt_match = ALT_MONTH_PATTERN.match(value)
    if alt_match:
        return int(alt_match.group(2)), int(alt_match.group(1))

    raise ValueError(f"Invalid month format: {value}. Use YYYY-MM or MM-YYYY")


def get_previous_month(today: datetime | None = None) -> tuple[int, int]:
    """Get (year, month) of the month before ``today`` (defaults to now)."""
    now = today or datetime.now()
    if now.month == 1:
        return now.year - 1, 12
    return now.year, now.month - 1


def format_month_display(year: int, month: int) -> str:
    """Format a month for display, e.g. ``02. February``."""
    return f"{month:02d}. {MONTH_NAMES[month - 1]}"


def format_month_directory(year: int, month: int) -> str:
    """Format a month for the report directory name (same as the display form)."""
    return format_month_display(year, month)


def format_timestamp(dt: datetime | None = None) -> str:
    """Format a timestamp for filenames: ``YYYYMMDD_HHMMSS_mmm``."""
    dt = dt or datetime.now()
    return f"{dt.strftime('%Y%m%d_%H%M%S')}_{dt.microsecond // 1000:03d}"


def format_human_readable_timestamp(dt: datetime | None = None) -> str:
    """Format a timestamp for directory names: ``YYYY-MM-DD HH:MM``."""
    dt = dt or datetime.now()
    return dt.strftime("%Y-%m-%d %H:%M")


def format_api_timestamp(dt: datetime) -> str:
    """Format a datetime as ISO 8601 UTC with milliseconds.

    Naive datetimes are treated as UTC.

    Example:
        >>> format_api_timestamp(datetime(2026, 1, 20, 12, tzinfo=timezone.utc))
        '2026-01-20T12:00:00.000Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return f"{dt.strftime('%Y-%m-%dT%H:%M:%S')}.{dt.microsecond // 1000:03d}Z"
