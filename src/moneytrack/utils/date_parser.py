"""Date parsing and formatting utilities."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional
import re

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_PATTERN_TOKENS = {"D": "DD", "M": "MM", "Y": "YYYY"}
_PATTERN_RE = re.compile(r"^(DD|MM|YYYY)([^A-Za-z0-9])(DD|MM|YYYY)\2(DD|MM|YYYY)$")
_SAMPLE_RE = re.compile(r"^\s*(\d{1,4})([-/. ])(\d{1,2})\2(\d{1,4})")


@dataclass(frozen=True)
class DateFormat:
    """Field order and separator used to render dates in a sheet.

    ``order`` is a permutation of "DMY" (e.g. "DMY" for 15-01-2024).
    """

    order: str = "YMD"
    separator: str = "-"

    @classmethod
    def from_pattern(cls, pattern: str) -> "DateFormat":
        """Build a format from a pattern like ``DD-MM-YYYY``.

        Raises:
            ValueError: If the pattern is not three DD/MM/YYYY fields joined by
                one separator
        """
        match = _PATTERN_RE.match((pattern or "").strip().upper())
        if match is None:
            raise ValueError(f"Unsupported date pattern '{pattern}'")
        fields = (match.group(1), match.group(3), match.group(4))
        order = "".join(field[0] for field in fields)
        if sorted(order) != ["D", "M", "Y"]:
            raise ValueError(f"Unsupported date pattern '{pattern}'")
        return cls(order=order, separator=match.group(2))

    @property
    def pattern(self) -> str:
        """Pattern string, e.g. ``DD-MM-YYYY``."""
        return self.separator.join(_PATTERN_TOKENS[field] for field in self.order)

    def format(self, value: date) -> str:
        """Render a date in this format."""
        parts = {
            "D": f"{value.day:02d}",
            "M": f"{value.month:02d}",
            "Y": f"{value.year:04d}",
        }
        return self.separator.join(parts[field] for field in self.order)

    def parse(self, value: str) -> date:
        """Parse a cell value written in (roughly) this format.

        Raises:
            ValueError: If the value cannot be parsed
        """
        if not value or not value.strip():
            raise ValueError("Empty date string")
        try:
            return date_parser.parse(
                value.strip(),
                dayfirst=self.order.startswith("D"),
                yearfirst=self.order.startswith("Y"),
            ).date()
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse date '{value}': {e}") from e


ISO_DATE_FORMAT = DateFormat(order="YMD", separator="-")


def detect_date_format(sample: Optional[str]) -> DateFormat:
    """Guess the date format of an existing cell value.

    The separator is the first non-digit between the leading numeric fields.
    A four-digit first field means year-first; otherwise the year is last and
    a first field above 12 means day-first, a second field above 12 means
    month-first, and ambiguous values are read day-first. Anything else falls
    back to ISO ``YYYY-MM-DD``.
    """
    if not sample:
        return ISO_DATE_FORMAT

    match = _SAMPLE_RE.match(sample)
    if match is None:
        return ISO_DATE_FORMAT

    first, separator, second, third = match.groups()
    if len(first) == 4:
        fmt = DateFormat(order="YMD", separator=separator)
        year, month, day = int(first), int(second), int(third)
    elif len(first) <= 2 and len(third) == 4:
        if int(second) > 12:
            fmt = DateFormat(order="MDY", separator=separator)
            month, day = int(first), int(second)
        else:
            fmt = DateFormat(order="DMY", separator=separator)
            day, month = int(first), int(second)
        year = int(third)
    else:
        return ISO_DATE_FORMAT

    try:
        date(year, month, day)
    except ValueError:
        return ISO_DATE_FORMAT
    return fmt


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)
        elif period in _WEEKDAYS:
            days_ago = (today.weekday() - _WEEKDAYS.index(period)) % 7
            return today - timedelta(days=days_ago or 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, this-week, last-month, last-year, last-week)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return (start_date, start_date + timedelta(days=6))

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
            "this-week, last-month, last-year, last-week"
        )
