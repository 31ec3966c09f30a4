"""Scene composition. Assembles the computed facts into a declarative SceneDescription.

No drawing happens here. Every node carries resolved canvas-pixel coordinates
derived from ``config.LAYOUT`` fractions, so one computation serves any
output resolution and any renderer.
"""

import logging

from iftarsky import config
from iftarsky.compute import (
    countdown_target,
    month_phase,
    panel_statuses,
    prayer_window,
    resolve_time_context,
    sky_appearance,
    validate_input,
)
from iftarsky.formatting import (
    format_12h,
    format_clock,
    format_countdown,
    format_day_label,
)
from iftarsky.geometry import (
    DotBox,
    build_arc,
    clamp_day,
    day_dots,
    get_dot_layout,
    star_field,
)
from iftarsky.i18n import t
from iftarsky.models import (
    ArcNode,
    ArcSpec,
    CircleNode,
    CountdownTarget,
    DayDot,
    DotStatus,
    GroupNode,
    MonthPhase,
    PanelStatus,
    RectNode,
    SceneDescription,
    SceneNode,
    SkyAppearance,
    Star,
    TextNode,
    WallpaperInput,
)

logger = logging.getLogger(__name__)

_WHITE = "#FFFFFF"
_GOLD = "#D4A847"
_MOON = "#F5DC82"
_CARD_FILL = "#040818"

# (fill, fill opacity, stroke, stroke opacity) for active / inactive panels
_PANEL_STYLES: dict[str, dict[bool, tuple[str, float, str, float]]] = {
    "suhoor": {
        True: ("#4664B4", 0.18, "#A8C4FF", 0.45),
        False: ("#324678", 0.08, "#6482C8", 0.12),
    },
    "iftar": {
        True: ("#B4781E", 0.18, "#D4A847", 0.55),
        False: ("#785014", 0.08, "#A07828", 0.12),
    },
}

_DOT_STYLES: dict[DotStatus, tuple[str, float]] = {
    DotStatus.PAST: ("#B48C32", 0.8),
    DotStatus.CURRENT: (_GOLD, 1.0),
    DotStatus.FUTURE: (_WHITE, 0.07),
}


def approx_text_width(text: str, size: float) -> float:
    """Rough advance width of a proportional sans-serif string.

    Only used to place decorations beside centred text; renderers do their
    own shaping.
    """
    return len(text) * size * 0.55


def _star_nodes(stars: tuple[Star, ...], width: int, height: int) -> GroupNode:
    nodes = tuple(
        CircleNode(
            cx=s.x_frac * width,
            cy=s.y_frac * height,
            r=s.size_frac * width / 2,
            fill=config.STAR_FIELD.color,
            fill_opacity=s.opacity,
        )
        for s in stars
    )
    return GroupNode(children=nodes, name="stars")


def _moon_nodes(sky: SkyAppearance, width: int, height: int) -> GroupNode:
    lay = config.LAYOUT
    cx = lay.moon_cx_w * width
    cy = lay.moon_cy_h * height
    r = lay.moon_r_w * width
    # Crescent: a lit disc with a sky-coloured disc cut over it
    return GroupNode(
        children=(
            CircleNode(cx=cx, cy=cy, r=r * 1.6, fill=_MOON, fill_opacity=0.12),
            CircleNode(cx=cx, cy=cy, r=r, fill=_MOON),
            CircleNode(
                cx=cx + lay.moon_cutout_dx_w * width,
                cy=cy + lay.moon_cutout_dy_w * width,
                r=lay.moon_cutout_r_w * width,
                fill=sky.top,
            ),
        ),
        name="moon",
    )


def _clock_nodes(
    query: WallpaperInput, width: int, height: int, unit: float
) -> GroupNode:
    lay = config.LAYOUT
    cx = width / 2
    gap = lay.clock_gap_w * unit
    y = lay.clock_top_h * height + lay.clock_size_w * unit
    nodes: list[SceneNode] = [
        TextNode(
            x=cx,
            y=y,
            text=format_clock(query.now_hour, query.now_minute),
            size=lay.clock_size_w * unit,
            color=_WHITE,
            opacity=0.92,
            weight=300,
            letter_spacing=-1,
        )
    ]
    if query.date_label:
        y += gap + lay.date_size_w * unit
        nodes.append(
            TextNode(
                x=cx,
                y=y,
                text=query.date_label,
                size=lay.date_size_w * unit,
                color=_WHITE,
                opacity=0.45,
                weight=300,
                letter_spacing=3,
            )
        )
    if query.hijri_label:
        y += gap + lay.hijri_size_w * unit
        nodes.append(
            TextNode(
                x=cx,
                y=y,
                text=query.hijri_label,
                size=lay.hijri_size_w * unit,
                color=_GOLD,
                opacity=0.85,
                letter_spacing=1,
            )
        )
    return GroupNode(children=tuple(nodes), name="clock")


def _ring_nodes(countdown: CountdownTarget, arc: ArcSpec, unit: float) -> GroupNode:
    lay = config.LAYOUT
    stroke_width = lay.ring_stroke_w * unit
    nodes: list[SceneNode] = [
        CircleNode(
            cx=arc.cx,
            cy=arc.cy,
            r=arc.r,
            stroke=_WHITE,
            stroke_opacity=0.07,
            stroke_width=stroke_width,
        )
    ]
    if not arc.empty:
        nodes.append(
            ArcNode(
                arc=arc,
                stroke=countdown.color_token,
                stroke_width=stroke_width * 3,
                stroke_opacity=0.18,
            )
        )
        nodes.append(
            ArcNode(arc=arc, stroke=countdown.color_token, stroke_width=stroke_width)
        )

    value_size = lay.arc_value_size_w * unit
    label_size = lay.arc_label_size_w * unit
    sub_size = lay.arc_sub_size_w * unit
    value_y = arc.cy + value_size * 0.35
    nodes.extend(
        [
            TextNode(
                x=arc.cx,
                y=value_y - value_size * 0.9,
                text=countdown.label,
                size=label_size,
                color=_WHITE,
                opacity=0.4,
                weight=300,
                letter_spacing=2,
            ),
            TextNode(
                x=arc.cx,
                y=value_y,
                text=format_countdown(countdown.remaining_min),
                size=value_size,
                color=_WHITE,
                opacity=0.95,
                weight=300,
                letter_spacing=-1,
            ),
            TextNode(
                x=arc.cx,
                y=value_y + sub_size * 2,
                text=countdown.sublabel,
                size=sub_size,
                color=_WHITE,
                opacity=0.3,
                weight=300,
                letter_spacing=1,
            ),
        ]
    )
    return GroupNode(children=tuple(nodes), name="countdown")


def _panel_node(
    kind: str,
    status: PanelStatus,
    title: str,
    time_text: str,
    accent: str,
    left: float,
    top: float,
    unit: float,
) -> GroupNode:
    lay = config.LAYOUT
    pw = lay.panel_width_w * unit
    ph = lay.panel_height_w * unit
    fill, fill_op, stroke, stroke_op = _PANEL_STYLES[kind][status.active]
    cx = left + pw / 2
    return GroupNode(
        children=(
            RectNode(
                x=left,
                y=top,
                width=pw,
                height=ph,
                fill=fill,
                fill_opacity=fill_op,
                stroke=stroke,
                stroke_opacity=stroke_op,
                stroke_width=max(1.0, unit / 1000),
                corner_radius=lay.panel_radius_w * unit,
            ),
            TextNode(
                x=cx,
                y=top + ph * 0.30,
                text=title,
                size=lay.panel_title_size_w * unit,
                color=_WHITE,
                opacity=0.4,
                weight=300,
                letter_spacing=2,
            ),
            TextNode(
                x=cx,
                y=top + ph * 0.62,
                text=time_text,
                size=lay.panel_time_size_w * unit,
                color=accent,
                weight=600,
                letter_spacing=-0.5,
            ),
            TextNode(
                x=cx,
                y=top + ph * 0.85,
                text=status.caption,
                size=lay.panel_caption_size_w * unit,
                color=_WHITE,
                opacity=0.28,
                weight=300,
                letter_spacing=0.5,
            ),
        ),
        name=f"panel-{kind}",
    )


def _dot_nodes(dots: tuple[DayDot, ...], dot_size: float, unit: float) -> GroupNode:
    r = dot_size / 2
    nodes: list[SceneNode] = []
    for dot in dots:
        fill, opacity = _DOT_STYLES[dot.status]
        if dot.status is DotStatus.CURRENT:
            nodes.append(
                CircleNode(cx=dot.x, cy=dot.y, r=r * 2, fill=_GOLD, fill_opacity=0.25)
            )
            nodes.append(CircleNode(cx=dot.x, cy=dot.y, r=r, fill=fill))
        elif dot.status is DotStatus.FUTURE:
            nodes.append(
                CircleNode(
                    cx=dot.x,
                    cy=dot.y,
                    r=r,
                    fill=fill,
                    fill_opacity=opacity,
                    stroke=_GOLD,
                    stroke_opacity=0.15,
                    stroke_width=max(1.0, unit / 1000),
                )
            )
        else:
            nodes.append(
                CircleNode(cx=dot.x, cy=dot.y, r=r, fill=fill, fill_opacity=opacity)
            )
    return GroupNode(children=tuple(nodes), name="days")


def _footer_nodes(
    day_label: str,
    phase: MonthPhase,
    city: str,
    phase_y: float,
    city_y: float,
    width: int,
    unit: float,
) -> GroupNode:
    lay = config.LAYOUT
    cx = width / 2
    size = lay.phase_size_w * unit
    rule_w = lay.phase_rule_w * unit
    rule_h = max(1.0, unit / 1000)
    half_text = approx_text_width(day_label, size) / 2
    rule_y = phase_y - size * 0.35
    nodes: list[SceneNode] = [
        RectNode(
            x=cx - half_text - size - rule_w,
            y=rule_y,
            width=rule_w,
            height=rule_h,
            fill=phase.color,
            fill_opacity=0.3,
        ),
        TextNode(
            x=cx,
            y=phase_y,
            text=day_label,
            size=size,
            color=_WHITE,
            opacity=0.3,
            weight=300,
            letter_spacing=1,
        ),
        RectNode(
            x=cx + half_text + size,
            y=rule_y,
            width=rule_w,
            height=rule_h,
            fill=phase.color,
            fill_opacity=0.3,
        ),
    ]
    if city:
        nodes.append(
            TextNode(
                x=cx,
                y=city_y,
                text=city.upper(),
                size=lay.city_size_w * unit,
                color=_WHITE,
                opacity=0.18,
                weight=300,
                letter_spacing=2,
            )
        )
    return GroupNode(children=tuple(nodes), name="footer")


def assemble_scene(
    query: WallpaperInput,
    dot_layout: str = "two_rows",
    lang: str = "en",
    star_seed: int = config.STAR_FIELD.seed,
) -> SceneDescription:
    """Validate the input and compute the full wallpaper scene.

    Args:
        query: Wallpaper request (clock time, prayer window, day, canvas).
        dot_layout: Day-dot layout name ("row", "two_rows" or "arc").
        lang: Language code for labels ('en' or 'ar').
        star_seed: Seed for the decorative star field.

    Returns:
        SceneDescription whose ``root`` node tree is ready for any renderer.

    Raises:
        InvalidInputError: On malformed time or canvas values.
        ValueError: On an unknown dot layout name.
    """
    validate_input(query)
    layout = get_dot_layout(dot_layout)

    width, height = query.canvas_width, query.canvas_height
    lay = config.LAYOUT
    # Sizes follow the width on portrait canvases, the height on squat ones
    unit = min(width, height / lay.portrait_aspect)

    context = resolve_time_context(query.now_hour, query.now_minute, prayer_window(query))
    sky = sky_appearance(context)
    countdown = countdown_target(context, lang)
    suhoor_status, iftar_status = panel_statuses(context, lang)
    logger.debug(
        "now=%d fajr=%d maghrib=%d phase=%s countdown=%s remaining=%d progress=%.3f",
        context.now_min,
        context.fajr_min,
        context.maghrib_min,
        context.phase.value,
        countdown.kind.value,
        countdown.remaining_min,
        countdown.progress,
    )

    day = clamp_day(query.current_day)
    if day != query.current_day:
        logger.debug("current_day %r out of range, using %d", query.current_day, day)
    phase = month_phase(day)

    # Vertical flow of the card
    card_left = (width - lay.card_width_w * width) / 2
    card_top = lay.card_top_h * height
    ring_box = lay.ring_box_w * unit
    ring_top = card_top + lay.card_pad_top_h * height
    arc = build_arc(
        countdown.progress,
        cx=width / 2,
        cy=ring_top + ring_box / 2,
        r=ring_box * lay.ring_radius_ratio,
    )
    panels_top = ring_top + ring_box + lay.panels_gap_h * height
    panel_w = lay.panel_width_w * unit
    spacing = lay.panel_spacing_w * unit
    dots_top = panels_top + lay.panel_height_w * unit + lay.dots_gap_h * height

    dot_size = lay.dot_size_w * unit
    dots_width = lay.dots_width_w * width
    box = DotBox(
        left=(width - dots_width) / 2,
        top=dots_top,
        width=dots_width,
        dot_size=dot_size,
        row_gap=lay.dot_row_gap_w * unit,
        depth=lay.dot_arc_depth_w * unit,
    )
    dots = day_dots(day, layout, box)
    phase_y = dots_top + layout.extent(len(dots), box) + lay.phase_gap_h * height
    city_y = phase_y + lay.city_gap_h * height

    stars = star_field(star_seed, config.STAR_FIELD.count)

    children: list[SceneNode] = [
        RectNode(
            x=0, y=0, width=width, height=height, gradient=(sky.top, sky.mid, sky.bottom)
        )
    ]
    if sky.is_night_visual:
        children.append(_star_nodes(stars, width, height))
        children.append(_moon_nodes(sky, width, height))
    children.append(_clock_nodes(query, width, height, unit))
    children.append(
        RectNode(
            x=card_left,
            y=card_top,
            width=lay.card_width_w * width,
            height=lay.card_bottom_h * height - card_top,
            fill=_CARD_FILL,
            fill_opacity=0.75,
            stroke=_GOLD,
            stroke_opacity=0.18,
            stroke_width=max(1.0, unit / 1000),
            corner_radius=lay.card_radius_w * unit,
        )
    )
    children.append(_ring_nodes(countdown, arc, unit))
    children.append(
        _panel_node(
            "suhoor",
            suhoor_status,
            t("panel_suhoor", lang),
            format_12h(query.suhoor_end_hour, query.suhoor_end_minute),
            config.SUHOOR_COLOR,
            left=width / 2 - spacing / 2 - panel_w,
            top=panels_top,
            unit=unit,
        )
    )
    children.append(
        _panel_node(
            "iftar",
            iftar_status,
            t("panel_iftar", lang),
            format_12h(query.iftar_start_hour, query.iftar_start_minute),
            config.IFTAR_COLOR,
            left=width / 2 + spacing / 2,
            top=panels_top,
            unit=unit,
        )
    )
    children.append(_dot_nodes(dots, dot_size, unit))
    children.append(
        _footer_nodes(
            format_day_label(day, phase, lang),
            phase,
            query.location_label,
            phase_y,
            city_y,
            width,
            unit,
        )
    )

    return SceneDescription(
        width=width,
        height=height,
        root=GroupNode(children=tuple(children), name="wallpaper"),
        context=context,
        sky=sky,
        countdown=countdown,
        arc=arc,
        stars=stars,
        dots=dots,
        month_phase=phase,
    )
