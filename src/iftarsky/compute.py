"""Time computation: minute-of-day normalization, day phases, sky colours, countdowns."""

import logging
from datetime import datetime

from pytz import UnknownTimeZoneError, timezone, utc

from iftarsky import config
from iftarsky.formatting import format_countdown
from iftarsky.i18n import t
from iftarsky.models import (
    MINUTES_PER_DAY,
    CountdownKind,
    CountdownTarget,
    DayPhase,
    InvalidInputError,
    MonthPhase,
    PanelStatus,
    PrayerWindow,
    SkyAppearance,
    TimeContext,
    WallpaperInput,
)

logger = logging.getLogger(__name__)


def _check_int(name: str, value: object, low: int, high: int) -> None:
    # bool is an int subclass, but True o'clock is not a time
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidInputError(f"{name} out of range [{low}, {high}]: {value}")


def validate_input(query: WallpaperInput) -> None:
    """Reject malformed time and canvas values before any computation.

    ``current_day`` is not checked here: out-of-range days are
    clamped by the dot layout instead of failing the whole wallpaper.

    Raises:
        InvalidInputError: On a non-integer or out-of-range field.
    """
    _check_int("now_hour", query.now_hour, 0, 23)
    _check_int("now_minute", query.now_minute, 0, 59)
    _check_int("suhoor_end_hour", query.suhoor_end_hour, 0, 23)
    _check_int("suhoor_end_minute", query.suhoor_end_minute, 0, 59)
    _check_int("iftar_start_hour", query.iftar_start_hour, 0, 23)
    _check_int("iftar_start_minute", query.iftar_start_minute, 0, 59)
    _check_int("canvas_width", query.canvas_width, 1, 100_000)
    _check_int("canvas_height", query.canvas_height, 1, 100_000)


def to_minutes(hour: int, minute: int) -> int:
    """Minute-of-day in [0, 1440)."""
    return (hour * 60 + minute) % MINUTES_PER_DAY


def prayer_window(query: WallpaperInput) -> PrayerWindow:
    return PrayerWindow(
        suhoor_end_min=to_minutes(query.suhoor_end_hour, query.suhoor_end_minute),
        iftar_start_min=to_minutes(query.iftar_start_hour, query.iftar_start_minute),
    )


def minutes_until(now_min: int, target_min: int) -> int:
    """Minutes from now until target, wrapping past midnight. Always in [0, 1440)."""
    diff = target_min - now_min
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff % MINUTES_PER_DAY


def classify_phase(
    now_min: int,
    fajr_min: int,
    maghrib_min: int,
    thresholds: config.PhaseThresholds = config.PHASE_THRESHOLDS,
) -> DayPhase:
    """Classify a minute-of-day into exactly one DayPhase.

    Checks run in order, so every input falls through to some phase even when
    a malformed window makes the ranges overlap.
    """
    if (
        now_min < fajr_min - thresholds.pre_fajr
        or now_min > maghrib_min + thresholds.after_maghrib
    ):
        return DayPhase.NIGHT
    if now_min < fajr_min:
        return DayPhase.PRE_FAJR
    if now_min < fajr_min + thresholds.dawn:
        return DayPhase.DAWN
    if now_min < maghrib_min - thresholds.sunset:
        return DayPhase.DAY
    if now_min <= maghrib_min:
        return DayPhase.SUNSET
    return DayPhase.NIGHT


def is_night_visual(
    now_min: int,
    fajr_min: int,
    maghrib_min: int,
    thresholds: config.PhaseThresholds = config.PHASE_THRESHOLDS,
) -> bool:
    """Decorative night test for stars and moon. Independent of classify_phase."""
    return (
        now_min < fajr_min - thresholds.night_visual
        or now_min > maghrib_min + thresholds.night_visual
    )


def resolve_time_context(
    now_hour: int, now_minute: int, window: PrayerWindow
) -> TimeContext:
    """Normalize the clock time against a PrayerWindow.

    Args:
        now_hour: Local hour (0-23).
        now_minute: Local minute (0-59).
        window: Fajr/maghrib as minute-of-day.

    Returns:
        TimeContext with the active DayPhase and the decorative night flag.
    """
    now_min = to_minutes(now_hour, now_minute)
    fajr_min = window.suhoor_end_min
    maghrib_min = window.iftar_start_min
    return TimeContext(
        now_min=now_min,
        fajr_min=fajr_min,
        maghrib_min=maghrib_min,
        phase=classify_phase(now_min, fajr_min, maghrib_min),
        is_night_visual=is_night_visual(now_min, fajr_min, maghrib_min),
    )


def _palette_name(context: TimeContext) -> str:
    if context.phase is DayPhase.NIGHT:
        after = context.maghrib_min + config.PHASE_THRESHOLDS.after_maghrib
        if context.maghrib_min < context.now_min <= after:
            return "after_maghrib"
        return "deep_night"
    return context.phase.value


def sky_appearance(context: TimeContext) -> SkyAppearance:
    """Stepped palette lookup for the current phase. No blending between phases."""
    name = _palette_name(context)
    top, mid, bottom = config.SKY_PALETTES[name]
    return SkyAppearance(
        top=top,
        mid=mid,
        bottom=bottom,
        is_night_visual=context.is_night_visual,
        palette=name,
    )


def _progress(remaining_min: int, window_total_min: int) -> float:
    return max(0.0, min(1.0, 1 - remaining_min / window_total_min))


def countdown_target(context: TimeContext, lang: str = "en") -> CountdownTarget:
    """Pick the active countdown and compute how far through its window we are.

    Three exhaustive branches: before fajr (suhoor ends), between fajr and
    maghrib (iftar), after maghrib (tomorrow's suhoor).
    """
    now, fajr, maghrib = context.now_min, context.fajr_min, context.maghrib_min
    if now < fajr:
        kind = CountdownKind.SUHOOR_END
        remaining = minutes_until(now, fajr)
        total = fajr
    elif now < maghrib:
        kind = CountdownKind.IFTAR
        remaining = minutes_until(now, maghrib)
        total = maghrib - fajr
    else:
        kind = CountdownKind.NEXT_SUHOOR
        remaining = minutes_until(now, fajr)
        total = MINUTES_PER_DAY - maghrib + fajr

    # An inverted window (maghrib at or before fajr) breaks every branch but the
    # midnight-to-fajr one
    inverted = maghrib <= fajr and kind is not CountdownKind.SUHOOR_END
    if total <= 0 or inverted:
        logger.warning(
            "Malformed %s window (fajr=%d, maghrib=%d); showing it as complete",
            kind.value,
            fajr,
            maghrib,
        )
        total = 1
        progress = 1.0
    else:
        progress = _progress(remaining, total)

    label_key, sub_key, color = config.COUNTDOWN_STYLES[kind.value]
    return CountdownTarget(
        kind=kind,
        label=t(label_key, lang),
        sublabel=t(sub_key, lang),
        color_token=color,
        remaining_min=remaining,
        window_total_min=total,
        progress=progress,
    )


def panel_statuses(
    context: TimeContext, lang: str = "en"
) -> tuple[PanelStatus, PanelStatus]:
    """Return (suhoor, iftar) panel states for the two-panel card."""
    now, fajr, maghrib = context.now_min, context.fajr_min, context.maghrib_min
    iftar_done = now >= maghrib

    if now < fajr:
        suhoor_caption = t("caption_left", lang).format(
            remaining=format_countdown(minutes_until(now, fajr))
        )
    else:
        suhoor_caption = t("caption_tomorrow", lang)

    if iftar_done:
        iftar_caption = t("caption_completed", lang)
    else:
        iftar_caption = t("caption_left", lang).format(
            remaining=format_countdown(minutes_until(now, maghrib))
        )

    suhoor = PanelStatus(active=now < fajr or now >= maghrib, caption=suhoor_caption)
    iftar = PanelStatus(active=fajr <= now < maghrib, caption=iftar_caption)
    return suhoor, iftar


def month_phase(day: int) -> MonthPhase:
    """The 10-day third of the month that ``day`` falls in."""
    for last_day, phase in config.MONTH_PHASES:
        if day <= last_day:
            return phase
    return config.MONTH_PHASES[-1][1]


def local_now(tz_name: str, now: datetime | None = None) -> datetime:
    """Return ``now`` (default: the current time) as an aware datetime in ``tz_name``.

    Args:
        tz_name: IANA timezone name ("Asia/Dubai").
        now: Aware or naive-UTC datetime; defaults to the current time.

    Raises:
        ValueError: On an unknown timezone name.
    """
    try:
        tz = timezone(tz_name)
    except UnknownTimeZoneError as exc:
        raise ValueError(f"Unknown timezone: {tz_name!r}") from exc
    if now is None:
        now = datetime.now(utc)
    elif now.tzinfo is None:
        now = utc.localize(now)
    return now.astimezone(tz)


def current_clock(tz_name: str, now: datetime | None = None) -> tuple[int, int]:
    """Return the local (hour, minute) in ``tz_name``."""
    local = local_now(tz_name, now)
    return local.hour, local.minute
