from __future__ import annotations

from dataclasses import replace

import pytest

from iftarsky.models import GroupNode, PrayerWindow, SceneNode, WallpaperInput

# 04:28 / 18:10, the Dubai window used throughout
FAJR = 268
MAGHRIB = 1090


@pytest.fixture
def window() -> PrayerWindow:
    return PrayerWindow(suhoor_end_min=FAJR, iftar_start_min=MAGHRIB)


@pytest.fixture
def make_query():
    base = WallpaperInput(
        now_hour=12,
        now_minute=0,
        suhoor_end_hour=4,
        suhoor_end_minute=28,
        iftar_start_hour=18,
        iftar_start_minute=10,
        current_day=5,
        canvas_width=1179,
        canvas_height=2556,
        location_label="Dubai",
        date_label="MON, 19 OCT",
        hijri_label="٥ رمضان ١٤٤٧",
    )

    def _make(**overrides) -> WallpaperInput:
        return replace(base, **overrides)

    return _make


def find_group(node: SceneNode, name: str) -> GroupNode | None:
    if isinstance(node, GroupNode):
        if node.name == name:
            return node
        for child in node.children:
            found = find_group(child, name)
            if found is not None:
                return found
    return None


def walk(node: SceneNode):
    yield node
    if isinstance(node, GroupNode):
        for child in node.children:
            yield from walk(child)
