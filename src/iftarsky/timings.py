"""Parse an upstream prayer-timings payload into a WallpaperInput.

The payload is the ``data`` object of an Aladhan ``timingsByCity`` response::

    {"timings": {"Fajr": "04:28 (+04)", "Maghrib": "18:10 (+04)", ...},
     "date": {"hijri": {"day": "05", "month": {"ar": "رَمَضان"}, "year": "1447"},
              "gregorian": {"date": "19-10-2026", ...}}}

Fetching it is the caller's business; nothing here touches the network.
"""

import re
from datetime import datetime
from typing import Any

from iftarsky.formatting import format_date_label, format_hijri
from iftarsky.models import WallpaperInput

_HHMM = re.compile(r"^\s*(\d{1,2}):(\d{2})")


class PayloadError(ValueError):
    """Upstream payload is missing a field or holds an unparseable time."""


def parse_hhmm(value: str) -> tuple[int, int]:
    """Parse "04:28" or "04:28 (+04)" into (hour, minute).

    Raises:
        PayloadError: If the string does not start with a valid HH:MM.
    """
    match = _HHMM.match(value) if isinstance(value, str) else None
    if match is None:
        raise PayloadError(f"Malformed time: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise PayloadError(f"Time out of range: {value!r}")
    return hour, minute


def _section(parent: Any, key: str) -> dict[str, Any]:
    """``parent[key]`` if it is an object, else an empty dict."""
    value = parent.get(key) if isinstance(parent, dict) else None
    return value if isinstance(value, dict) else {}


def _hijri_day(hijri: dict[str, Any]) -> int:
    try:
        day = int(hijri.get("day", ""))
    except (TypeError, ValueError):
        return 1
    return day or 1


def _date_label(payload: dict[str, Any]) -> str:
    raw = _section(_section(payload, "date"), "gregorian").get("date")
    if not isinstance(raw, str) or not raw:
        return ""
    try:
        return format_date_label(datetime.strptime(raw, "%d-%m-%Y").date())
    except ValueError:
        return ""


def input_from_payload(
    payload: dict[str, Any],
    now: tuple[int, int],
    canvas: tuple[int, int],
    city: str,
) -> WallpaperInput:
    """Build a WallpaperInput from an upstream timings payload.

    Args:
        payload: The ``data`` object of the upstream response.
        now: Local (hour, minute) at the requested city.
        canvas: Output (width, height) in pixels.
        city: Location label shown at the bottom of the card.

    Returns:
        WallpaperInput with fajr as suhoor end and maghrib as iftar start.

    Raises:
        PayloadError: When the payload is not an object, or Fajr or Maghrib
            is missing or malformed.
    """
    if not isinstance(payload, dict):
        raise PayloadError(f"Payload must be a JSON object, got {type(payload).__name__}")
    timings = _section(payload, "timings")
    if "Fajr" not in timings or "Maghrib" not in timings:
        raise PayloadError("Payload has no Fajr/Maghrib timings")
    suhoor_h, suhoor_m = parse_hhmm(timings["Fajr"])
    iftar_h, iftar_m = parse_hhmm(timings["Maghrib"])

    hijri = _section(_section(payload, "date"), "hijri")
    hijri_label = ""
    if hijri.get("day") and hijri.get("year"):
        month_ar = _section(hijri, "month").get("ar", "")
        hijri_label = format_hijri(hijri["day"], month_ar, hijri["year"])

    return WallpaperInput(
        now_hour=now[0],
        now_minute=now[1],
        suhoor_end_hour=suhoor_h,
        suhoor_end_minute=suhoor_m,
        iftar_start_hour=iftar_h,
        iftar_start_minute=iftar_m,
        current_day=_hijri_day(hijri),
        canvas_width=canvas[0],
        canvas_height=canvas[1],
        location_label=city,
        date_label=_date_label(payload),
        hijri_label=hijri_label,
    )
