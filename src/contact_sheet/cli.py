"""
Module: cli

Purpose:
    Command-line front end: build a sheet from image files, apply
    rotations and scale adjustments, and export the PDF.

Key Functions:
    - main(): Entry point for the `contact-sheet` console script

Dependencies:
    - argparse (std)
    - controller: export_sheet()

Example:
    contact-sheet a.jpg b.jpg c.png --landscape --rotate 2 --scale 1:+0.3 -o out/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from contact_sheet import __version__
from contact_sheet.config import DEFAULT_OUTPUT_NAME, ExportConfig
from contact_sheet.controller import export_sheet
from contact_sheet.core.errors import ContactSheetError
from contact_sheet.core.models import MAX_SLOTS, Orientation, SheetModel
from contact_sheet.images.source import SUPPORTED_EXTS
from contact_sheet.layout.config import DEFAULT_GUTTER_PX, DEFAULT_MARGIN_PX, LayoutConfig
from contact_sheet.output.rasterizer import render_preview

logger = logging.getLogger(__name__)

PREVIEW_MAX_SIDE = 800


def _slot_number(text: str) -> int:
    """Parse a 1-based slot number into a 0-based index."""
    try:
        number = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"slot must be an integer: {text!r}") from None
    if not 1 <= number <= MAX_SLOTS:
        raise argparse.ArgumentTypeError(f"slot must be 1-{MAX_SLOTS}: {number}")
    return number - 1


def _rotate_spec(text: str) -> Tuple[int, int]:
    """Parse SLOT[:TIMES] into (index, quarter turns)."""
    slot, _, times = text.partition(":")
    try:
        turns = int(times) if times else 1
    except ValueError:
        raise argparse.ArgumentTypeError(f"rotation count must be an integer: {text!r}") from None
    return _slot_number(slot), turns


def _scale_spec(text: str) -> Tuple[int, float]:
    """Parse SLOT:DELTA into (index, delta)."""
    slot, sep, delta = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected SLOT:DELTA, got {text!r}")
    try:
        value = float(delta)
    except ValueError:
        raise argparse.ArgumentTypeError(f"scale delta must be a number: {text!r}") from None
    return _slot_number(slot), value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contact-sheet",
        description=f"Arrange up to {MAX_SLOTS} images on a 3x3 A4 sheet and export it as PDF.",
    )
    parser.add_argument(
        "images",
        nargs="+",
        type=Path,
        help="Image files, or directories to take images from (sorted by name)",
    )
    parser.add_argument("-o", "--output-dir", type=Path, default=Path("."), help="Output directory")
    parser.add_argument("--name", default=DEFAULT_OUTPUT_NAME, help="Output file name")
    parser.add_argument("--landscape", action="store_true", help="Landscape page (default portrait)")
    parser.add_argument(
        "--rotate",
        action="append",
        default=[],
        type=_rotate_spec,
        metavar="SLOT[:TIMES]",
        help="Rotate slot (1-based) 90 degrees clockwise, TIMES times",
    )
    parser.add_argument(
        "--scale",
        action="append",
        default=[],
        type=_scale_spec,
        metavar="SLOT:DELTA",
        help="Adjust slot scale by DELTA (clamped to 0.1-2.0)",
    )
    parser.add_argument("--margin", type=int, default=DEFAULT_MARGIN_PX, help="Page margin in pixels")
    parser.add_argument("--gutter", type=int, default=DEFAULT_GUTTER_PX, help="Cell gutter in pixels")
    parser.add_argument("--preview", type=Path, help="Also write a small PNG preview to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def collect_images(paths: Sequence[Path]) -> List[Path]:
    """Expand directories into their supported image files."""
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            found = sorted(
                p for p in path.iterdir()
                if p.is_file() and p.suffix.lower() in SUPPORTED_EXTS
            )
            logger.debug(f"Found {len(found)} image(s) in {path}")
            files.extend(found)
        else:
            files.append(path)
    return files


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        config = ExportConfig(
            layout=LayoutConfig(margin_px=args.margin, gutter_px=args.gutter),
            output_name=args.name,
        )
    except ValueError as e:
        parser.error(str(e))

    sheet = SheetModel(Orientation.LANDSCAPE if args.landscape else Orientation.PORTRAIT)
    try:
        sheet.add_images(collect_images(args.images))
        for index, turns in args.rotate:
            for _ in range(turns % 4):
                sheet.rotate_image(index)
        for index, delta in args.scale:
            sheet.adjust_scale(index, delta)

        snapshot = sheet.snapshot()
        if args.preview:
            preview = render_preview(snapshot, PREVIEW_MAX_SIDE, config.layout, background=config.background)
            args.preview.parent.mkdir(parents=True, exist_ok=True)
            preview.save(args.preview, format="PNG")
            logger.info(f"Wrote preview to {args.preview}")

        result = export_sheet(snapshot, args.output_dir / config.output_name, config)
    except ContactSheetError as e:
        logger.error(f"{e.kind}: {e}")
        return 1
    except OSError as e:
        logger.error(f"File system error while reading images or writing the preview: {e}")
        return 1

    print(result.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
