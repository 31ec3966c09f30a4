from __future__ import annotations

import math

import pytest

from iftarsky.geometry import (
    DOT_LAYOUTS,
    ArcLayout,
    DotBox,
    RowLayout,
    TwoRowLayout,
    arc_path_d,
    build_arc,
    clamp_day,
    day_dots,
    get_dot_layout,
    lcg_skip,
    lcg_stream,
    star_at,
    star_field,
)
from iftarsky.models import DotStatus

BOX = DotBox(left=0, top=100, width=300, dot_size=10, row_gap=5, depth=20)


# --- arc ---


@pytest.mark.parametrize(
    "progress, flag",
    [(0.0, 0), (0.25, 0), (0.5, 0), (0.5000001, 1), (0.75, 1), (1.0, 1)],
)
def test_large_arc_flag_law(progress, flag):
    assert build_arc(progress, 200, 200, 160).large_arc_flag == flag


def test_large_arc_flag_sweep():
    for i in range(1001):
        p = i / 1000
        assert build_arc(p, 0, 0, 1).large_arc_flag == (1 if p > 0.5 else 0)


def test_arc_starts_at_twelve_oclock_and_sweeps_clockwise():
    arc = build_arc(0.25, 200, 200, 160)
    assert arc.sweep_flag == 1
    assert arc.start == pytest.approx((200, 40))
    # A quarter turn clockwise on a y-down canvas lands at 3 o'clock
    assert arc.end == pytest.approx((360, 200))
    assert arc.end_angle - arc.start_angle == pytest.approx(math.pi / 2)


def test_tiny_progress_is_empty():
    assert build_arc(0.004, 0, 0, 10).empty
    assert arc_path_d(build_arc(0.004, 0, 0, 10)) == ""
    assert not build_arc(0.005, 0, 0, 10).empty


def test_full_progress_never_closes_the_circle():
    arc = build_arc(1.0, 200, 200, 160)
    assert arc.end_angle - arc.start_angle == pytest.approx(0.999 * 2 * math.pi)
    assert arc.end != pytest.approx(arc.start)


def test_arc_path_data():
    d = arc_path_d(build_arc(0.75, 200, 200, 160))
    assert d.startswith("M 200.00 40.00 A 160.00 160.00 0 1 1 ")
    assert d.endswith("40.00 200.00")


# --- stars ---


def test_lcg_is_the_documented_generator():
    first = next(lcg_stream(7))
    assert first == ((7 * 1664525 + 1013904223) % 2**32) / 2**32


def test_lcg_skip_matches_stepping():
    state = 7
    for _ in range(37):
        state = (state * 1664525 + 1013904223) % 2**32
    assert lcg_skip(7, 37) == state
    assert lcg_skip(123, 0) == 123


def test_star_field_is_deterministic():
    assert star_field(7, 60) == star_field(7, 60)
    assert star_field(7, 60) != star_field(8, 60)
    # A longer draw is an extension of the shorter one
    assert star_field(7, 80)[:60] == star_field(7, 60)


def test_star_at_matches_field():
    field = star_field(7, 60)
    for i in (0, 1, 17, 59):
        assert star_at(7, i) == field[i]


def test_stars_stay_in_the_sky():
    for s in star_field(7, 200):
        assert 0 <= s.x_frac < 1
        assert 0 <= s.y_frac < 0.45
        assert 0.5 / 400 <= s.size_frac < 2.0 / 400
        assert 0.2 <= s.opacity < 0.8


# --- day dots ---


@pytest.mark.parametrize("current_day", range(1, 31))
@pytest.mark.parametrize("layout_name", sorted(DOT_LAYOUTS))
def test_dot_partition(current_day, layout_name):
    dots = day_dots(current_day, get_dot_layout(layout_name), BOX)
    statuses = [d.status for d in dots]
    assert [d.index for d in dots] == list(range(1, 31))
    assert statuses.count(DotStatus.PAST) == current_day - 1
    assert statuses.count(DotStatus.CURRENT) == 1
    assert statuses.count(DotStatus.FUTURE) == 30 - current_day


def test_last_day():
    dots = day_dots(30, RowLayout(), BOX)
    assert dots[-1].status is DotStatus.CURRENT
    assert all(d.status is DotStatus.PAST for d in dots[:-1])


@pytest.mark.parametrize("bad", [0, -3, 31, 99, None, "5", True])
def test_out_of_range_day_clamps_to_first(bad):
    assert clamp_day(bad) == 1
    dots = day_dots(bad, RowLayout(), BOX)
    assert dots[0].status is DotStatus.CURRENT


def test_row_layout_spacing():
    dots = day_dots(1, RowLayout(), BOX)
    assert dots[0].x == pytest.approx(5)
    assert dots[-1].x == pytest.approx(295)
    assert {d.y for d in dots} == {105}


def test_two_row_layout():
    dots = day_dots(1, TwoRowLayout(), BOX)
    top, bottom = dots[:15], dots[15:]
    assert {d.y for d in top} == {105}
    assert {d.y for d in bottom} == {120}
    assert [d.x for d in top] == pytest.approx([d.x for d in bottom])
    assert TwoRowLayout().extent(30, BOX) == 25


def test_arc_layout_is_a_parabola():
    dots = day_dots(1, ArcLayout(), BOX)
    y_top = 100 + 20 + 5
    assert dots[0].x == pytest.approx(0)
    assert dots[-1].x == pytest.approx(300)
    assert dots[0].y == pytest.approx(y_top)
    assert dots[-1].y == pytest.approx(y_top)
    for i, d in enumerate(dots):
        norm_x = (i - 14.5) / 14.5
        assert d.y == pytest.approx(y_top - 20 * (1 - norm_x**2))
    # Symmetric, highest in the middle
    assert dots[14].y == pytest.approx(dots[15].y)
    assert min(d.y for d in dots) == dots[14].y


def test_layout_does_not_change_status():
    by_layout = [
        [d.status for d in day_dots(12, layout, BOX)]
        for layout in DOT_LAYOUTS.values()
    ]
    assert all(statuses == by_layout[0] for statuses in by_layout)


def test_unknown_layout():
    with pytest.raises(ValueError, match="Unknown dot layout"):
        get_dot_layout("spiral")
