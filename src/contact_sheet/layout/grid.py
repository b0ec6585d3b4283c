"""
Module: layout.grid

Purpose:
    Compute the nine cell rectangles of the 3x3 sheet grid.

    Cells are congruent squares sized by whichever page dimension is
    tighter; the 3x3 block is centred inside the margin-inset region and
    the leftover space becomes extra margin. All arithmetic is integer,
    so identical inputs always yield identical rectangles.

Key Functions:
    - compute_grid(): Nine CellRects in row-major order

Key Classes:
    - CellRect: Pixel rectangle of one cell

Dependencies:
    - layout.page: PageSpec

Used By:
    - output.rasterizer: Where each slot is drawn
    - controller: Export pipeline
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .config import DEFAULT_GUTTER_PX, DEFAULT_MARGIN_PX
from .page import PageSpec

GRID_ROWS = 3
GRID_COLUMNS = 3
CELL_COUNT = GRID_ROWS * GRID_COLUMNS


@dataclass(frozen=True, slots=True)
class CellRect:
    """
    Pixel rectangle of one grid cell.

    The rectangle covers [x, x + width) x [y, y + height).

    Attributes:
        x: Left edge (inclusive)
        y: Top edge (inclusive)
        width: Width in pixels
        height: Height in pixels

    Example:
        >>> cell = CellRect(10, 20, 100, 100)
        >>> cell.right, cell.bottom
        (110, 120)
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Right edge (exclusive)."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Bottom edge (exclusive)."""
        return self.y + self.height

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom) box in PIL order."""
        return (self.x, self.y, self.right, self.bottom)

    def overlaps(self, other: "CellRect") -> bool:
        """Check if the two rectangles share any pixel."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


def compute_grid(
    page: PageSpec,
    margin_px: int = DEFAULT_MARGIN_PX,
    gutter_px: int = DEFAULT_GUTTER_PX,
) -> tuple[CellRect, ...]:
    """
    Lay out the 3x3 grid on a page.

    Index 0 is the top-left cell, index 2 the top-right and index 8 the
    bottom-right.

    Args:
        page: Target page
        margin_px: Border kept blank on every page edge
        gutter_px: Space between adjacent cells

    Returns:
        Tuple of nine congruent, non-overlapping CellRects

    Raises:
        ValueError: If margins and gutters leave no room for a cell

    Example:
        >>> grid = compute_grid(compute_page_spec("portrait"), 118, 59)
        >>> grid[0]
        CellRect(x=119, y=633, width=708, height=708)
    """
    if margin_px < 0 or gutter_px < 0:
        raise ValueError(f"margin and gutter must be non-negative: {margin_px}, {gutter_px}")

    available_width = page.width_px - 2 * margin_px
    available_height = page.height_px - 2 * margin_px

    cell_width = (available_width - (GRID_COLUMNS - 1) * gutter_px) // GRID_COLUMNS
    cell_height = (available_height - (GRID_ROWS - 1) * gutter_px) // GRID_ROWS
    side = min(cell_width, cell_height)
    if side <= 0:
        raise ValueError(
            f"Margin {margin_px}px and gutter {gutter_px}px leave no room "
            f"for cells on a {page.width_px}x{page.height_px} page"
        )

    block_width = GRID_COLUMNS * side + (GRID_COLUMNS - 1) * gutter_px
    block_height = GRID_ROWS * side + (GRID_ROWS - 1) * gutter_px
    origin_x = margin_px + (available_width - block_width) // 2
    origin_y = margin_px + (available_height - block_height) // 2

    step = side + gutter_px
    return tuple(
        CellRect(
            x=origin_x + column * step,
            y=origin_y + row * step,
            width=side,
            height=side,
        )
        for row in range(GRID_ROWS)
        for column in range(GRID_COLUMNS)
    )
