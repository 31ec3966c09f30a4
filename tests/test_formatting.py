from datetime import date

import pytest

from iftarsky.config import MONTH_PHASES
from iftarsky.formatting import (
    format_12h,
    format_clock,
    format_countdown,
    format_date_label,
    format_day_label,
    format_hijri,
    to_arabic_numerals,
)


@pytest.mark.parametrize(
    "hour, minute, expected",
    [
        (4, 28, "4:28 AM"),
        (18, 10, "6:10 PM"),
        (0, 5, "12:05 AM"),
        (12, 0, "12:00 PM"),
        (23, 59, "11:59 PM"),
    ],
)
def test_format_12h(hour, minute, expected):
    assert format_12h(hour, minute) == expected


def test_format_clock():
    assert format_clock(15, 7) == "3:07"
    assert format_clock(0, 0) == "12:00"


@pytest.mark.parametrize(
    "minutes, expected", [(0, "00:00"), (88, "01:28"), (568, "09:28"), (1439, "23:59")]
)
def test_format_countdown(minutes, expected):
    assert format_countdown(minutes) == expected


def test_arabic_numerals():
    assert to_arabic_numerals(1447) == "١٤٤٧"
    assert to_arabic_numerals("05") == "٠٥"


def test_format_hijri():
    assert format_hijri(5, "رمضان", 1447) == "٥ رمضان ١٤٤٧"


def test_format_date_label():
    assert format_date_label(date(2026, 10, 19)) == "MON, 19 OCT"
    assert format_date_label(date(2026, 3, 1)) == "SUN, 1 MAR"


def test_format_day_label():
    mercy = MONTH_PHASES[0][1]
    assert format_day_label(3, mercy) == "Day 3 · Days of Mercy"
    assert format_day_label(3, mercy, "ar") == "اليوم 3 · أيام الرحمة"
