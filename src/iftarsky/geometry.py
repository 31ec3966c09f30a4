"""Geometry: countdown arc, seeded star field, and day-dot layouts.

Coordinate system (matches the SVG renderer):
  x grows to the right, y grows downward, angles are radians measured from
  +x toward +y, so -pi/2 is 12 o'clock and increasing angle is clockwise.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from iftarsky import config
from iftarsky.models import ArcSpec, DayDot, DotStatus, Star

# --- Countdown arc ---

_START_ANGLE = -math.pi / 2


def polar_to_xy(cx: float, cy: float, r: float, angle: float) -> tuple[float, float]:
    return cx + r * math.cos(angle), cy + r * math.sin(angle)


def build_arc(progress: float, cx: float, cy: float, r: float) -> ArcSpec:
    """Convert a progress fraction into a clockwise arc starting at 12 o'clock.

    The sweep is capped just short of a full turn, since start == end would
    make the SVG arc command draw nothing. Below ARC_MIN_PROGRESS the returned
    spec is marked empty and backends skip it.

    Args:
        progress: Completion fraction in [0, 1]. Values outside are clamped.
        cx: Circle centre x (canvas pixels).
        cy: Circle centre y (canvas pixels).
        r: Circle radius (canvas pixels).

    Returns:
        ArcSpec with resolved endpoints and SVG arc flags.
    """
    swept = max(0.0, min(progress, config.ARC_MAX_PROGRESS))
    end_angle = _START_ANGLE + swept * 2 * math.pi
    return ArcSpec(
        cx=cx,
        cy=cy,
        r=r,
        start_angle=_START_ANGLE,
        end_angle=end_angle,
        large_arc_flag=1 if progress > config.ARC_LARGE_THRESHOLD else 0,
        sweep_flag=1,
        start=polar_to_xy(cx, cy, r, _START_ANGLE),
        end=polar_to_xy(cx, cy, r, end_angle),
        empty=progress < config.ARC_MIN_PROGRESS,
    )


def arc_path_d(arc: ArcSpec) -> str:
    """SVG path data for an ArcSpec. Empty string for an empty arc."""
    if arc.empty:
        return ""
    sx, sy = arc.start
    ex, ey = arc.end
    return (
        f"M {sx:.2f} {sy:.2f} "
        f"A {arc.r:.2f} {arc.r:.2f} 0 {arc.large_arc_flag} {arc.sweep_flag} "
        f"{ex:.2f} {ey:.2f}"
    )


# --- Star field ---
# Numerical Recipes LCG. The constants and the draw order are part of the
# output contract: the same seed must give the same sky in every backend.

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2**32


def lcg_stream(seed: int) -> Iterator[float]:
    """Infinite stream of floats in [0, 1) from the LCG seeded with ``seed``."""
    state = seed % LCG_MODULUS
    while True:
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        yield state / LCG_MODULUS


def lcg_skip(state: int, steps: int) -> int:
    """Advance an LCG state by ``steps`` in O(log steps)."""
    acc_mult, acc_plus = 1, 0
    cur_mult, cur_plus = LCG_MULTIPLIER, LCG_INCREMENT
    while steps > 0:
        if steps & 1:
            acc_mult = acc_mult * cur_mult % LCG_MODULUS
            acc_plus = (acc_plus * cur_mult + cur_plus) % LCG_MODULUS
        cur_plus = (cur_mult + 1) * cur_plus % LCG_MODULUS
        cur_mult = cur_mult * cur_mult % LCG_MODULUS
        steps >>= 1
    return (acc_mult * state + acc_plus) % LCG_MODULUS


def _star_from_draws(
    draws: Iterator[float], cfg: config.StarFieldConfig = config.STAR_FIELD
) -> Star:
    x = next(draws)
    y = next(draws) * cfg.sky_fraction
    size = (next(draws) * cfg.size_range + cfg.min_size) * cfg.size_unit
    opacity = next(draws) * cfg.opacity_range + cfg.min_opacity
    return Star(x_frac=x, y_frac=y, size_frac=size, opacity=opacity)


def star_field(
    seed: int = config.STAR_FIELD.seed, count: int = config.STAR_FIELD.count
) -> tuple[Star, ...]:
    """Generate ``count`` stars. Identical (seed, count) gives identical output."""
    draws = lcg_stream(seed)
    return tuple(_star_from_draws(draws) for _ in range(count))


def star_at(seed: int, index: int) -> Star:
    """The ``index``-th star of ``star_field(seed, n)`` without generating the rest."""
    state = lcg_skip(seed % LCG_MODULUS, 4 * index)
    return _star_from_draws(lcg_stream(state))


# --- Day dots ---


@dataclass(frozen=True)
class DotBox:
    """Region the dot strip is laid out in. Canvas pixels."""

    left: float
    top: float
    width: float
    dot_size: float
    row_gap: float = 0.0
    depth: float = 0.0  # Arc layout only


class DotLayout(Protocol):
    name: str

    def place(self, i: int, total: int, box: DotBox) -> tuple[float, float]:
        """Centre of the zero-based ``i``-th dot."""
        ...

    def extent(self, total: int, box: DotBox) -> float:
        """Height the strip occupies below ``box.top``."""
        ...


class RowLayout:
    name = "row"

    def place(self, i: int, total: int, box: DotBox) -> tuple[float, float]:
        step = box.width / total
        return box.left + step * (i + 0.5), box.top + box.dot_size / 2

    def extent(self, total: int, box: DotBox) -> float:
        return box.dot_size


class TwoRowLayout:
    name = "two_rows"

    def place(self, i: int, total: int, box: DotBox) -> tuple[float, float]:
        per_row = math.ceil(total / 2)
        row, col = divmod(i, per_row)
        step = box.width / per_row
        x = box.left + step * (col + 0.5)
        y = box.top + box.dot_size / 2 + row * (box.dot_size + box.row_gap)
        return x, y

    def extent(self, total: int, box: DotBox) -> float:
        return 2 * box.dot_size + box.row_gap


class ArcLayout:
    """Dots on a downward-opening parabola: ends at y_top, centre raised by depth."""

    name = "arc"

    def place(self, i: int, total: int, box: DotBox) -> tuple[float, float]:
        half = (total - 1) / 2 or 1
        norm_x = (i - half) / half
        x = box.left + box.width * (norm_x + 1) / 2
        y_top = box.top + box.depth + box.dot_size / 2
        return x, y_top - box.depth * (1 - norm_x**2)

    def extent(self, total: int, box: DotBox) -> float:
        return box.depth + box.dot_size


DOT_LAYOUTS: dict[str, DotLayout] = {
    layout.name: layout for layout in (RowLayout(), TwoRowLayout(), ArcLayout())
}


def get_dot_layout(name: str) -> DotLayout:
    if name not in DOT_LAYOUTS:
        raise ValueError(
            f"Unknown dot layout: {name!r} (choose from {', '.join(DOT_LAYOUTS)})"
        )
    return DOT_LAYOUTS[name]


def clamp_day(current_day: object, total: int = config.TOTAL_DAYS) -> int:
    """Days outside [1, total] (or non-integers) become 1."""
    if isinstance(current_day, bool) or not isinstance(current_day, int):
        return 1
    if not 1 <= current_day <= total:
        return 1
    return current_day


def dot_status(index: int, current_day: int) -> DotStatus:
    if index < current_day:
        return DotStatus.PAST
    if index == current_day:
        return DotStatus.CURRENT
    return DotStatus.FUTURE


def day_dots(
    current_day: int,
    layout: DotLayout,
    box: DotBox,
    total: int = config.TOTAL_DAYS,
) -> tuple[DayDot, ...]:
    """Classify and position one dot per day of the month.

    The layout only decides positions; past/current/future depends on the
    day alone.
    """
    day = clamp_day(current_day, total)
    dots: list[DayDot] = []
    for i in range(total):
        x, y = layout.place(i, total, box)
        dots.append(DayDot(index=i + 1, status=dot_status(i + 1, day), x=x, y=y))
    return tuple(dots)
