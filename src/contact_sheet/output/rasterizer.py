"""
Module: output.rasterizer

Purpose:
    Composite a sheet snapshot into a single page-sized RGB raster.
    Each occupied slot is decoded, rotated, contain-fitted to its cell,
    multiplied by its scale and centred on the cell centre. Cells
    without a slot are left as background.

Key Functions:
    - render(): Page raster for a snapshot and grid
    - render_preview(): Reduced-size raster sharing the export geometry

Dependencies:
    - PIL: Image compositing
    - images: Decoding and transforms
    - layout: PageSpec, CellRect, compute_grid

Used By:
    - controller: Export pipeline
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

from PIL import Image

from contact_sheet.core.errors import RenderFailure
from contact_sheet.core.models.slots import SheetSnapshot
from contact_sheet.images.source import DEFAULT_BACKGROUND, decode_image
from contact_sheet.images.transform import transform_for_cell
from contact_sheet.layout.config import LayoutConfig
from contact_sheet.layout.grid import CELL_COUNT, CellRect, compute_grid
from contact_sheet.layout.page import PageSpec, compute_page_spec

logger = logging.getLogger(__name__)


def render(
    snapshot: SheetSnapshot,
    grid: Sequence[CellRect],
    page: PageSpec,
    *,
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> Image.Image:
    """
    Render a snapshot into a page raster.

    Slots are drawn in index order into grid[index]. Images scaled
    above 1.0 may spill into the gutter; only the page edge clips.

    Args:
        snapshot: Frozen sheet state
        grid: Nine cell rectangles from compute_grid()
        page: Page the grid was computed for
        background: RGB fill for the page and empty cells

    Returns:
        RGB image of page.size

    Raises:
        RenderFailure: If any slot cannot be decoded or drawn
        ValueError: If the grid does not have nine cells

    Example:
        >>> page = compute_page_spec(Orientation.PORTRAIT)
        >>> raster = render(sheet.snapshot(), compute_grid(page), page)
        >>> raster.size
        (2480, 3508)
    """
    if len(grid) != CELL_COUNT:
        raise ValueError(f"Grid must have {CELL_COUNT} cells, got {len(grid)}")

    canvas = Image.new("RGB", page.size, background)
    for index, slot in enumerate(snapshot.slots):
        try:
            img = decode_image(slot.source, background)
            fitted, position = transform_for_cell(img, grid[index], slot.rotation, slot.scale)
            canvas.paste(fitted, position)
        except Exception as e:
            # Discard the partial raster
            canvas.close()
            label = slot.name or f"slot {index + 1}"
            raise RenderFailure(f"Could not render {label}: {e}", index=index) from e

        logger.debug(
            f"Slot {index}: {img.width}x{img.height} -> {fitted.width}x{fitted.height} "
            f"at {position}, rotation={slot.rotation}, scale={slot.scale}"
        )

    logger.info(f"Rendered {snapshot.count} image(s) onto {page.width_px}x{page.height_px} page")
    return canvas


def render_preview(
    snapshot: SheetSnapshot,
    max_side: int,
    config: LayoutConfig = LayoutConfig(),
    *,
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> Image.Image:
    """
    Render a small preview with the same geometry as the export.

    The page size comes from compute_page_spec(...).scaled(), and margin
    and gutter shrink by the same factor, so preview and export always
    agree on aspect ratio and orientation.

    Args:
        snapshot: Frozen sheet state
        max_side: Length of the preview's longer side in pixels
        config: Layout used for the export
        background: RGB fill colour

    Returns:
        RGB preview image

    Raises:
        RenderFailure: If the layout leaves no room at this size, or a
            slot cannot be rendered
    """
    full_page = compute_page_spec(snapshot.orientation, config.dpi)
    try:
        page = full_page.scaled(max_side)
        factor = page.width_px / full_page.width_px
        preview_layout = config.scaled(factor)
        grid = compute_grid(page, preview_layout.margin_px, preview_layout.gutter_px)
    except ValueError as e:
        raise RenderFailure(f"Preview of {max_side}px is too small for the layout: {e}") from e
    return render(snapshot, grid, page, background=background)
