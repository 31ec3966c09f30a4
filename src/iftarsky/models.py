"""Wallpaper data model: request, computed time facts, and the scene node tree."""

from dataclasses import dataclass
from enum import Enum

MINUTES_PER_DAY = 1440


class InvalidInputError(ValueError):
    """Malformed wallpaper input (non-numeric or out-of-range time/canvas values)."""


class DayPhase(Enum):
    """Structural time-of-day classification. Selects the sky palette."""

    PRE_FAJR = "pre_fajr"
    DAWN = "dawn"
    DAY = "day"
    SUNSET = "sunset"
    NIGHT = "night"


class CountdownKind(Enum):
    SUHOOR_END = "suhoor_end"  # before fajr, counting down to it
    IFTAR = "iftar"  # between fajr and maghrib
    NEXT_SUHOOR = "next_suhoor"  # after maghrib, counting to tomorrow's fajr


class DotStatus(Enum):
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


@dataclass(frozen=True)
class WallpaperInput:
    """Raw wallpaper request. Not yet validated."""

    now_hour: int
    now_minute: int
    suhoor_end_hour: int  # Fajr
    suhoor_end_minute: int
    iftar_start_hour: int  # Maghrib
    iftar_start_minute: int
    current_day: int  # Day of the lunar month (1..30)
    canvas_width: int  # Pixels
    canvas_height: int  # Pixels
    location_label: str
    date_label: str = ""  # Display only ("SUN, 19 OCT")
    hijri_label: str = ""  # Display only, already formatted


@dataclass(frozen=True)
class PrayerWindow:
    """The two daily boundaries as minute-of-day integers."""

    suhoor_end_min: int
    iftar_start_min: int


@dataclass(frozen=True)
class TimeContext:
    """Result of time normalization. Input to sky/countdown computation."""

    now_min: int
    fajr_min: int
    maghrib_min: int
    phase: DayPhase
    is_night_visual: bool  # Looser threshold; gates stars and moon


@dataclass(frozen=True)
class SkyAppearance:
    """3-stop vertical gradient, top to bottom."""

    top: str
    mid: str
    bottom: str
    is_night_visual: bool
    palette: str  # Palette name in config.SKY_PALETTES


@dataclass(frozen=True)
class CountdownTarget:
    kind: CountdownKind
    label: str  # "UNTIL IFTAR"
    sublabel: str  # "hold strong"
    color_token: str  # Hex colour of the progress arc
    remaining_min: int  # Always in [0, 1440)
    window_total_min: int  # Never 0
    progress: float  # [0, 1]


@dataclass(frozen=True)
class PanelStatus:
    """State of one of the two prayer panels below the countdown ring."""

    active: bool
    caption: str  # "01:28 left", "tomorrow", "completed ✓"


@dataclass(frozen=True)
class ArcSpec:
    """Circular arc descriptor usable by any 2-D vector backend.

    Angles are radians in screen space (y grows downward), so -pi/2 is
    12 o'clock and increasing angle runs clockwise.
    """

    cx: float
    cy: float
    r: float
    start_angle: float
    end_angle: float
    large_arc_flag: int
    sweep_flag: int
    start: tuple[float, float]
    end: tuple[float, float]
    empty: bool  # True: render nothing


@dataclass(frozen=True)
class Star:
    """A decorative star. Fractions of canvas width/height."""

    x_frac: float
    y_frac: float
    size_frac: float  # Diameter as a fraction of canvas width
    opacity: float


@dataclass(frozen=True)
class DayDot:
    index: int  # 1..30
    status: DotStatus
    x: float  # Centre, canvas pixels
    y: float


@dataclass(frozen=True)
class MonthPhase:
    """One of the three 10-day thirds of the month."""

    name: str  # "Days of Mercy"
    name_ar: str
    color: str


# --- Scene nodes ---
# Every coordinate is absolute canvas pixel space. Colours are hex strings,
# transparency lives in the separate opacity fields.


@dataclass(frozen=True)
class RectNode:
    x: float
    y: float
    width: float
    height: float
    fill: str | None = None
    fill_opacity: float = 1.0
    gradient: tuple[str, str, str] | None = None  # Vertical, overrides fill
    stroke: str | None = None
    stroke_opacity: float = 1.0
    stroke_width: float = 0.0
    corner_radius: float = 0.0


@dataclass(frozen=True)
class CircleNode:
    cx: float
    cy: float
    r: float
    fill: str | None = None
    fill_opacity: float = 1.0
    stroke: str | None = None
    stroke_opacity: float = 1.0
    stroke_width: float = 0.0


@dataclass(frozen=True)
class ArcNode:
    arc: ArcSpec
    stroke: str
    stroke_width: float
    stroke_opacity: float = 1.0


@dataclass(frozen=True)
class TextNode:
    x: float  # Anchor point
    y: float  # Baseline
    text: str
    size: float  # Pixels
    color: str
    opacity: float = 1.0
    weight: int = 400
    anchor: str = "middle"  # "start" | "middle" | "end"
    letter_spacing: float = 0.0


@dataclass(frozen=True)
class GroupNode:
    children: tuple["SceneNode", ...] = ()
    opacity: float = 1.0
    name: str = ""  # Debug/markup id only


SceneNode = RectNode | CircleNode | ArcNode | TextNode | GroupNode


@dataclass(frozen=True)
class SceneDescription:
    """The sole input to renderers. Fully computed state."""

    width: int
    height: int
    root: GroupNode
    context: TimeContext
    sky: SkyAppearance
    countdown: CountdownTarget
    arc: ArcSpec
    stars: tuple[Star, ...]
    dots: tuple[DayDot, ...]
    month_phase: MonthPhase
