"""
Command-line entry point.

Renders the year-progress wallpaper for one date and writes it as PNG or
SVG, plus optional render metadata:
  - latest.png / latest.svg  (the wallpaper)
  - render.json              (with --meta)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .calendar_math import CalendarDate, year_progress
from .config import CACHE_MAX_AGE, FORMATS, STYLES, Settings
from .errors import WallpaperError
from .raster import Rasterizer
from .resolve import resolve_date
from .scene import render
from .svg import to_svg

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="progress-wallpaper",
        description="Render a year-progress calendar wallpaper",
    )
    p.add_argument("--date", help="YYYY-MM-DD (default: today in --tz)")
    p.add_argument("--tz", default=settings.timezone, help="IANA timezone (default: %(default)s)")
    p.add_argument("--style", choices=STYLES, default=settings.style)
    p.add_argument("--format", dest="output_format", choices=FORMATS, default=settings.output_format)
    p.add_argument("--font", type=Path, default=settings.font_path, help="TTF/OTF file for labels")
    p.add_argument("--output", help="output file, or - for stdout (default: OUTPUT_DIR/latest.<format>)")
    p.add_argument("--meta", action="store_true", help="also write render.json next to the image")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def render_bytes(
    date: CalendarDate, colored: bool, output_format: str, font_path: Optional[Path] = None
) -> bytes:
    """Render ``date`` and return SVG markup or PNG bytes."""
    scene = render(date, colored)
    if output_format == "svg":
        return to_svg(scene).encode("utf-8")
    font_bytes = font_path.read_bytes() if font_path else None
    return Rasterizer(font_bytes).rasterize(scene)


def export_metadata(
    date: CalendarDate, settings: Settings, now: datetime, output_dir: Path
) -> Path:
    """Save render metadata as JSON. Returns the written path."""
    progress = year_progress(date)
    meta = {
        "generated_at": now.isoformat(),
        "date": date.to_date().isoformat(),
        "style": settings.style,
        "format": settings.output_format,
        "percentage": progress.percentage,
        "cache_max_age": CACHE_MAX_AGE,
    }
    meta_path = output_dir / "render.json"
    meta_path.write_text(json.dumps(meta, indent=2))
    print(f"  Metadata:  {meta_path}")
    return meta_path


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.verbose)

    settings = replace(
        settings,
        timezone=args.tz,
        style=args.style,
        output_format=args.output_format,
        font_path=args.font,
    )
    now = datetime.now(timezone.utc)
    date = resolve_date(args.date, settings.timezone, now)
    logger.info("Rendering %s (%s, %s)", date.to_date(), settings.style, settings.output_format)

    try:
        data = render_bytes(date, settings.colored, settings.output_format, settings.font_path)
        if args.output == "-":
            sys.stdout.buffer.write(data)
            sys.stdout.buffer.flush()
            return 0

        path = write_output(data, args.output, settings)
        if args.meta:
            export_metadata(date, settings, now, path.parent)
    except (WallpaperError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def write_output(data: bytes, output: Optional[str], settings: Settings) -> Path:
    """Write the image to ``output``, or OUTPUT_DIR/latest.<format>."""
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
    else:
        settings.output_dir.mkdir(parents=True, exist_ok=True)
        path = settings.output_dir / f"latest.{settings.output_format}"
    path.write_bytes(data)
    print(f"  Wrote: {path}")
    return path


if __name__ == "__main__":
    raise SystemExit(main())
