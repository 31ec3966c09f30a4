from __future__ import annotations

import pytest

from conftest import find_group, walk
from iftarsky.config import LAYOUT
from iftarsky.models import (
    ArcNode,
    CountdownKind,
    DayPhase,
    DotStatus,
    InvalidInputError,
    RectNode,
    TextNode,
)
from iftarsky.scene import assemble_scene


def _texts(scene) -> list[str]:
    return [n.text for n in walk(scene.root) if isinstance(n, TextNode)]


def test_night_scene_has_stars_and_moon(make_query):
    scene = assemble_scene(make_query(now_hour=1, now_minute=0))
    assert scene.sky.is_night_visual
    stars = find_group(scene.root, "stars")
    assert stars is not None and len(stars.children) == 60
    assert find_group(scene.root, "moon") is not None


def test_day_scene_has_no_stars(make_query):
    scene = assemble_scene(make_query(now_hour=12, now_minute=0))
    assert scene.context.phase is DayPhase.DAY
    assert find_group(scene.root, "stars") is None
    assert find_group(scene.root, "moon") is None
    # Still computed, just not drawn
    assert len(scene.stars) == 60


def test_background_is_sky_gradient(make_query):
    scene = assemble_scene(make_query(now_hour=19, now_minute=0))
    background = scene.root.children[0]
    assert isinstance(background, RectNode)
    assert background.gradient == (scene.sky.top, scene.sky.mid, scene.sky.bottom)
    assert (background.width, background.height) == (1179, 2556)
    assert scene.sky.palette == "after_maghrib"


def test_countdown_text_and_arc(make_query):
    scene = assemble_scene(make_query(now_hour=19, now_minute=0))
    assert scene.countdown.kind is CountdownKind.NEXT_SUHOOR
    texts = _texts(scene)
    assert "UNTIL SUHOOR" in texts
    assert "09:28" in texts
    assert "7:00" in texts
    assert "4:28 AM" in texts and "6:10 PM" in texts
    arcs = [n for n in walk(scene.root) if isinstance(n, ArcNode)]
    assert arcs and all(a.arc == scene.arc for a in arcs)
    assert scene.arc.cx == pytest.approx(1179 / 2)
    assert scene.arc.r == pytest.approx(LAYOUT.ring_box_w * 1179 * LAYOUT.ring_radius_ratio)


def test_empty_arc_draws_no_arc_nodes(make_query):
    # Right at maghrib the next-suhoor window has just started
    scene = assemble_scene(make_query(now_hour=18, now_minute=10))
    assert scene.arc.empty
    assert not [n for n in walk(scene.root) if isinstance(n, ArcNode)]


def test_footer_labels(make_query):
    scene = assemble_scene(make_query(current_day=15, location_label="Abu Dhabi"))
    texts = _texts(scene)
    assert "Day 15 · Days of Forgiveness" in texts
    assert "ABU DHABI" in texts
    assert "MON, 19 OCT" in texts
    assert "٥ رمضان ١٤٤٧" in texts


def test_out_of_range_day_clamps(make_query):
    scene = assemble_scene(make_query(current_day=42))
    assert scene.dots[0].status is DotStatus.CURRENT
    assert "Day 1 · Days of Mercy" in _texts(scene)


def test_day_dots_match_status(make_query):
    scene = assemble_scene(make_query(current_day=30))
    statuses = [d.status for d in scene.dots]
    assert statuses.count(DotStatus.PAST) == 29
    assert statuses.count(DotStatus.CURRENT) == 1
    days = find_group(scene.root, "days")
    # The current day carries an extra glow circle
    assert len(days.children) == 31


def test_scene_scales_with_canvas(make_query):
    small = assemble_scene(make_query(canvas_width=1000, canvas_height=2000))
    large = assemble_scene(make_query(canvas_width=2000, canvas_height=4000))
    assert large.arc.cx == pytest.approx(2 * small.arc.cx)
    assert large.arc.cy == pytest.approx(2 * small.arc.cy)
    assert large.arc.r == pytest.approx(2 * small.arc.r)
    for a, b in zip(small.dots, large.dots):
        assert b.x == pytest.approx(2 * a.x)
        assert b.y == pytest.approx(2 * a.y)


@pytest.mark.parametrize(
    "width, height", [(1179, 2556), (1080, 2400), (1080, 1080), (2000, 1000), (3000, 600)]
)
def test_everything_inside_the_canvas(make_query, width, height):
    query = make_query(now_hour=2, canvas_width=width, canvas_height=height)
    for layout in ("row", "two_rows", "arc"):
        scene = assemble_scene(query, dot_layout=layout)
        for node in walk(scene.root):
            if isinstance(node, TextNode):
                assert 0 <= node.x <= scene.width
                assert 0 <= node.y <= scene.height
        for dot in scene.dots:
            assert 0 <= dot.x <= scene.width
            assert 0 <= dot.y <= scene.height


def test_same_input_same_scene(make_query):
    assert assemble_scene(make_query()) == assemble_scene(make_query())


def test_arabic_scene(make_query):
    texts = _texts(assemble_scene(make_query(current_day=25), lang="ar"))
    assert "حتى الإفطار" in texts
    assert "اليوم 25 · العتق من النار" in texts


def test_invalid_time_fails_before_computing(make_query):
    with pytest.raises(InvalidInputError):
        assemble_scene(make_query(now_minute=75))


def test_unknown_layout(make_query):
    with pytest.raises(ValueError):
        assemble_scene(make_query(), dot_layout="spiral")


def test_squat_canvas_sizes_from_height(make_query):
    portrait = assemble_scene(make_query(canvas_width=500, canvas_height=1000))
    landscape = assemble_scene(make_query(canvas_width=2000, canvas_height=1000))
    assert landscape.arc.r == pytest.approx(portrait.arc.r)
    assert landscape.arc.cy == pytest.approx(portrait.arc.cy)
    assert landscape.arc.cx == pytest.approx(1000)
    assert [d.y for d in landscape.dots] == pytest.approx([d.y for d in portrait.dots])
