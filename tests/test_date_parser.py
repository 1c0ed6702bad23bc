"""Tests for date parsing and format detection."""

from datetime import date, timedelta

import pytest

from moneytrack.utils.date_parser import (
    ISO_DATE_FORMAT,
    DateFormat,
    detect_date_format,
    get_date_range,
    parse_date,
)


@pytest.mark.parametrize(
    "pattern,order,separator",
    [
        ("DD-MM-YYYY", "DMY", "-"),
        ("MM/DD/YYYY", "MDY", "/"),
        ("yyyy.mm.dd", "YMD", "."),
    ],
)
def test_from_pattern(pattern, order, separator):
    fmt = DateFormat.from_pattern(pattern)

    assert fmt.order == order
    assert fmt.separator == separator


@pytest.mark.parametrize("pattern", ["DD-MM-YY", "DD-DD-YYYY", "DD-MM/YYYY", "", "nonsense"])
def test_from_pattern_invalid(pattern):
    with pytest.raises(ValueError):
        DateFormat.from_pattern(pattern)


def test_format_and_pattern():
    fmt = DateFormat.from_pattern("MM/DD/YYYY")

    assert fmt.format(date(2024, 3, 5)) == "03/05/2024"
    assert fmt.pattern == "MM/DD/YYYY"


def test_parse_respects_field_order():
    assert DateFormat("DMY", "-").parse("05-03-2024") == date(2024, 3, 5)
    assert DateFormat("MDY", "/").parse("05/03/2024") == date(2024, 5, 3)


@pytest.mark.parametrize("value", ["", "not a date"])
def test_parse_invalid(value):
    with pytest.raises(ValueError):
        DateFormat("DMY", "-").parse(value)


@pytest.mark.parametrize(
    "sample,expected",
    [
        ("2024/01/15", DateFormat("YMD", "/")),
        ("15.01.2024", DateFormat("DMY", ".")),
        ("01-02-2024", DateFormat("DMY", "-")),
        ("03/14/2024", DateFormat("MDY", "/")),
        ("15-01-2024 10:30", DateFormat("DMY", "-")),
        ("13-13-2024", ISO_DATE_FORMAT),
        ("1-2-24", ISO_DATE_FORMAT),
        ("March 3", ISO_DATE_FORMAT),
        ("", ISO_DATE_FORMAT),
        (None, ISO_DATE_FORMAT),
    ],
)
def test_detect_date_format(sample, expected):
    assert detect_date_format(sample) == expected


def test_parse_date_absolute():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_date_relative():
    today = date.today()

    assert parse_date("today") == today
    assert parse_date("yesterday") == today - timedelta(days=1)
    assert parse_date("this month") == today.replace(day=1)
    assert parse_date("this year") == today.replace(month=1, day=1)


def test_parse_date_invalid():
    with pytest.raises(ValueError):
        parse_date("not a date")


def test_get_date_range_last_month():
    start, end = get_date_range("last-month")

    assert start.day == 1
    assert end == date.today().replace(day=1) - timedelta(days=1)


def test_get_date_range_last_week_is_seven_days():
    start, end = get_date_range("last-week")

    assert start.weekday() == 0
    assert (end - start).days == 6


def test_get_date_range_unknown():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
