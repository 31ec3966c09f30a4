"""Display strings for the wallpaper text nodes."""

from datetime import date

from iftarsky.i18n import t
from iftarsky.models import MonthPhase

_ARABIC_DIGITS = str.maketrans("0123456789", "٠١٢٣٤٥٦٧٨٩")


def format_12h(hour: int, minute: int) -> str:
    """04:28 -> "4:28 AM", 18:10 -> "6:10 PM", 00:05 -> "12:05 AM"."""
    period = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {period}"


def format_clock(hour: int, minute: int) -> str:
    """Lock-screen clock: 12-hour, no period ("3:07")."""
    return f"{hour % 12 or 12}:{minute:02d}"


def format_countdown(minutes: int) -> str:
    """Remaining minutes as zero-padded "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_arabic_numerals(value: int | str) -> str:
    return str(value).translate(_ARABIC_DIGITS)


def format_hijri(day: int | str, month_ar: str, year: int | str) -> str:
    """Hijri date label in Arabic-Indic digits ("٥ رمضان ١٤٤٧")."""
    return f"{to_arabic_numerals(day)} {month_ar} {to_arabic_numerals(year)}"


def format_date_label(day: date) -> str:
    """Short weekday/day/month, upper-cased ("MON, 19 OCT")."""
    return day.strftime("%a, %d %b").upper().replace(" 0", " ")


def format_day_label(day: int, phase: MonthPhase, lang: str = "en") -> str:
    name = phase.name_ar if lang == "ar" else phase.name
    return t("day_label", lang).format(day=day, phase=name)
