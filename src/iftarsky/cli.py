"""Command-line entry point for wallpaper generation.

Usage examples:
  - Explicit window, current time in IFTARSKY_TZ:
      iftarsky --suhoor 04:28 --iftar 18:10 --day 5

  - Pinned time, PNG for a Pixel 8:
      iftarsky --now 03:00 --suhoor 04:28 --iftar 18:10 --model pixel8 --format png

  - From a saved upstream timings response:
      iftarsky --payload dubai.json --city Dubai -o wallpaper.svg
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from iftarsky.compute import local_now
from iftarsky.config import Settings, device_size, load_settings
from iftarsky.formatting import format_date_label
from iftarsky.geometry import DOT_LAYOUTS
from iftarsky.models import WallpaperInput
from iftarsky.renderers.base import FORMATS, get_renderer
from iftarsky.scene import assemble_scene
from iftarsky.timings import PayloadError, input_from_payload, parse_hhmm

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="iftarsky",
        description="Render a suhoor/iftar countdown phone wallpaper.",
    )
    p.add_argument(
        "--now", help="Local time HH:MM (default: current time in IFTARSKY_TZ)"
    )
    p.add_argument("--suhoor", help="Suhoor end (fajr) HH:MM")
    p.add_argument("--iftar", help="Iftar start (maghrib) HH:MM")
    p.add_argument(
        "--day", type=int, help="Day of the month, 1-30 (default: payload Hijri day, else 1)"
    )
    p.add_argument("--payload", type=Path, help="Upstream timings JSON file")
    p.add_argument("--model", help="Phone model (default: IFTARSKY_MODEL)")
    p.add_argument("--city", help="Location label (default: IFTARSKY_CITY)")
    p.add_argument("--layout", choices=sorted(DOT_LAYOUTS), help="Day-dot layout")
    p.add_argument("--lang", choices=["en", "ar"], help="Label language")
    p.add_argument("--format", choices=FORMATS, default="svg", dest="fmt")
    p.add_argument("--hijri-label", default="", help="Hijri date line under the clock")
    p.add_argument("-o", "--output", type=Path, help="Output file")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def _load_payload(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise PayloadError(f"{path}: expected a JSON object")
    # Accept the whole response or just its "data" object
    return data.get("data", data)


def resolve_query(
    args: argparse.Namespace, settings: Settings, clock: datetime | None = None
) -> WallpaperInput:
    """Combine CLI arguments, environment settings, and an optional payload.

    Explicit arguments win over the payload, which wins over the environment.
    ``clock`` (default: now) is read in the configured timezone for both the
    clock time and the date label.

    Raises:
        PayloadError: On a malformed HH:MM argument or payload.
        ValueError: When neither a payload nor both --suhoor/--iftar are given,
            or the configured timezone is unknown.
    """
    local = local_now(settings.tz, clock)
    now = parse_hhmm(args.now) if args.now else (local.hour, local.minute)
    canvas = device_size(args.model or settings.model)
    city = args.city or settings.city

    if args.payload is None:
        if not (args.suhoor and args.iftar):
            raise ValueError("Give --payload, or both --suhoor and --iftar")
        suhoor_h, suhoor_m = parse_hhmm(args.suhoor)
        iftar_h, iftar_m = parse_hhmm(args.iftar)
        return WallpaperInput(
            now_hour=now[0],
            now_minute=now[1],
            suhoor_end_hour=suhoor_h,
            suhoor_end_minute=suhoor_m,
            iftar_start_hour=iftar_h,
            iftar_start_minute=iftar_m,
            current_day=args.day if args.day is not None else 1,
            canvas_width=canvas[0],
            canvas_height=canvas[1],
            location_label=city,
            date_label=format_date_label(local.date()),
            hijri_label=args.hijri_label,
        )

    query = input_from_payload(_load_payload(args.payload), now, canvas, city)
    overrides: dict[str, object] = {}
    if args.suhoor:
        overrides["suhoor_end_hour"], overrides["suhoor_end_minute"] = parse_hhmm(
            args.suhoor
        )
    if args.iftar:
        overrides["iftar_start_hour"], overrides["iftar_start_minute"] = parse_hhmm(
            args.iftar
        )
    if args.day is not None:
        overrides["current_day"] = args.day
    if args.hijri_label:
        overrides["hijri_label"] = args.hijri_label
    return replace(query, **overrides)


def default_output(query: WallpaperInput, extension: str) -> Path:
    stamp = f"{query.now_hour:02d}_{query.now_minute:02d}"
    filename = f"{query.location_label}__{stamp}.{extension}".replace(" ", "_")
    return Path("results") / filename


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    settings = load_settings()

    try:
        query = resolve_query(args, settings)
        scene = assemble_scene(
            query,
            dot_layout=args.layout or settings.dot_layout,
            lang=args.lang or settings.lang,
        )
    except (ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 2

    renderer = get_renderer(args.fmt)
    output = args.output or default_output(query, renderer.extension)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(renderer.render(scene))
    logger.info(
        "Saved: %s (%s, %s)", output, scene.context.phase.value, scene.countdown.kind.value
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
