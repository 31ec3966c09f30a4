"""Design constants and environment-backed settings.

Every threshold, palette and layout proportion the engine uses lives here so
it can be tuned (and tested) without touching the algorithms.
"""

import os
from dataclasses import dataclass

from iftarsky.models import MonthPhase

# --- Day phase thresholds (minutes relative to fajr/maghrib) ---


@dataclass(frozen=True)
class PhaseThresholds:
    pre_fajr: int = 80  # PRE_FAJR starts this long before fajr
    dawn: int = 40  # DAWN lasts this long after fajr
    sunset: int = 60  # SUNSET starts this long before maghrib
    after_maghrib: int = 80  # Post-maghrib glow; deep night after this
    night_visual: int = 30  # Stars/moon threshold, looser than the phases


PHASE_THRESHOLDS = PhaseThresholds()

# --- Sky palettes (top, mid, bottom) ---

SKY_PALETTES: dict[str, tuple[str, str, str]] = {
    "deep_night": ("#020817", "#040D28", "#060B20"),
    "pre_fajr": ("#050A22", "#0C1845", "#102040"),
    "dawn": ("#1A1040", "#5A2555", "#C04535"),
    "day": ("#0A1845", "#1A3565", "#1E4875"),
    "sunset": ("#1A0A22", "#6A2A18", "#D06030"),
    "after_maghrib": ("#080620", "#120830", "#0C0820"),
}

# --- Countdown styles per branch: (label key, sublabel key, arc colour) ---

SUHOOR_COLOR = "#A8C4FF"
IFTAR_COLOR = "#D4A847"

COUNTDOWN_STYLES: dict[str, tuple[str, str, str]] = {
    "suhoor_end": ("arc_suhoor_end", "sub_suhoor_end", SUHOOR_COLOR),
    "iftar": ("arc_iftar", "sub_iftar", IFTAR_COLOR),
    "next_suhoor": ("arc_next_suhoor", "sub_next_suhoor", SUHOOR_COLOR),
}

# --- Month thirds: (last day inclusive, phase) ---

MONTH_PHASES: tuple[tuple[int, MonthPhase], ...] = (
    (10, MonthPhase(name="Days of Mercy", name_ar="أيام الرحمة", color="#A8C4FF")),
    (
        20,
        MonthPhase(name="Days of Forgiveness", name_ar="أيام المغفرة", color="#90D4A0"),
    ),
    (30, MonthPhase(name="Seeking Freedom", name_ar="العتق من النار", color="#FFD080")),
)

TOTAL_DAYS = 30

# --- Star field ---


@dataclass(frozen=True)
class StarFieldConfig:
    seed: int = 7
    count: int = 60
    sky_fraction: float = 0.45  # Stars stay in the top 45% of the canvas
    min_size: float = 0.5  # In 1/400ths of canvas width
    size_range: float = 1.5
    min_opacity: float = 0.2
    opacity_range: float = 0.6
    size_unit: float = 1 / 400
    color: str = "#FFF8DC"


STAR_FIELD = StarFieldConfig()

# --- Arc ---

ARC_MAX_PROGRESS = 0.999  # A full 2*pi sweep collapses to a zero-length path
ARC_MIN_PROGRESS = 0.005  # Below this nothing is drawn
ARC_LARGE_THRESHOLD = 0.5


# --- Layout (fractions of canvas width "w" or height "h") ---


@dataclass(frozen=True)
class LayoutConfig:
    # Height/width ratio the "_w" sizes are designed for. Wider canvases size
    # everything from height / portrait_aspect instead of the width.
    portrait_aspect: float = 2.0
    # Clock block
    clock_top_h: float = 0.05
    clock_size_w: float = 0.19
    date_size_w: float = 0.035
    hijri_size_w: float = 0.038
    clock_gap_w: float = 0.012
    # Crescent moon
    moon_cx_w: float = 0.80
    moon_cy_h: float = 0.07
    moon_r_w: float = 0.045
    moon_cutout_dx_w: float = 0.018
    moon_cutout_dy_w: float = -0.010
    moon_cutout_r_w: float = 0.038
    # Card
    card_width_w: float = 0.92
    card_top_h: float = 0.21
    card_bottom_h: float = 0.84
    card_radius_w: float = 0.04
    card_pad_top_h: float = 0.03
    # Countdown ring; square box is ring_box_w wide, radius is 0.4 of the box
    ring_box_w: float = 0.92 * 0.72
    ring_radius_ratio: float = 0.4
    ring_stroke_w: float = 0.0085
    arc_label_size_w: float = 0.028
    arc_value_size_w: float = 0.13
    arc_sub_size_w: float = 0.026
    # Panels
    panels_gap_h: float = 0.022
    panel_width_w: float = 0.41
    panel_height_w: float = 0.24
    panel_spacing_w: float = 0.018
    panel_radius_w: float = 0.025
    panel_title_size_w: float = 0.032
    panel_time_size_w: float = 0.063
    panel_caption_size_w: float = 0.026
    # Day dots
    dots_gap_h: float = 0.035
    dot_size_w: float = 0.022
    dot_row_gap_w: float = 0.03
    dots_width_w: float = 0.80
    dot_arc_depth_w: float = 0.06
    # Footer labels
    phase_gap_h: float = 0.035
    phase_size_w: float = 0.028
    phase_rule_w: float = 0.05
    city_gap_h: float = 0.025
    city_size_w: float = 0.024


LAYOUT = LayoutConfig()

# --- Phone sizes (pixels) ---

DEVICE_SIZES: dict[str, tuple[int, int]] = {
    "iphone16pro": (1206, 2622),
    "iphone16": (1179, 2556),
    "iphone15": (1179, 2556),
    "iphone14": (1170, 2532),
    "iphone13": (1170, 2532),
    "iphone12": (1170, 2532),
    "s24ultra": (1440, 3088),
    "s24": (1080, 2340),
    "pixel8": (1080, 2400),
    "default": (1179, 2556),
}


def device_size(model: str) -> tuple[int, int]:
    """Return (width, height) for a phone model name. Unknown models get the default."""
    return DEVICE_SIZES.get(model.strip().lower(), DEVICE_SIZES["default"])


# --- Runtime settings ---


@dataclass(frozen=True)
class Settings:
    city: str
    model: str
    tz: str
    dot_layout: str
    lang: str


def load_settings() -> Settings:
    """Read runtime settings from the environment.

    Entry points call ``load_dotenv()`` first, so a local ``.env`` file works too.
    """
    return Settings(
        city=os.environ.get("IFTARSKY_CITY", "Dubai").strip() or "Dubai",
        model=os.environ.get("IFTARSKY_MODEL", "iphone15").strip().lower(),
        tz=os.environ.get("IFTARSKY_TZ", "Asia/Dubai"),
        dot_layout=os.environ.get("IFTARSKY_DOT_LAYOUT", "two_rows"),
        lang=os.environ.get("IFTARSKY_LANG", "en"),
    )
