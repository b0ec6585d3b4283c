"""
Module: layout.page

Purpose:
    Single source of truth for page pixel dimensions. Both the export
    and any preview derive their size from compute_page_spec(), so the
    two can never disagree on aspect ratio or on which way landscape
    turns the page.

Key Functions:
    - compute_page_spec(): A4 pixel size for an orientation at a DPI

Key Classes:
    - PageSpec: Page pixel size and resolution

Dependencies:
    - core.models.slots: Orientation

Used By:
    - layout.grid: Cell geometry
    - output.rasterizer: Raster size
    - output.encoder: Page size in points
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from contact_sheet.core.models.slots import Orientation

from .config import DEFAULT_DPI

# ISO 216 A4
A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0

MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0


def mm_to_px(mm: float, dpi: int = DEFAULT_DPI) -> int:
    """Convert millimetres to whole pixels at dpi (round half to even)."""
    return int(round(mm / MM_PER_INCH * dpi))


def px_to_pt(px: float, dpi: int = DEFAULT_DPI) -> float:
    """
    Convert pixels to PDF points.

    PDF points are 1/72 inch.
    """
    return px * POINTS_PER_INCH / dpi


@dataclass(frozen=True)
class PageSpec:
    """
    Pixel dimensions of a page at a print resolution (immutable).

    Attributes:
        width_px: Page width in pixels
        height_px: Page height in pixels
        dpi: Resolution the pixel size is interpreted at

    Example:
        >>> spec = compute_page_spec(Orientation.PORTRAIT)
        >>> spec.size
        (2480, 3508)
        >>> round(spec.width_pt, 1)
        595.2
    """

    width_px: int
    height_px: int
    dpi: int = DEFAULT_DPI

    def __post_init__(self) -> None:
        if self.width_px <= 0 or self.height_px <= 0:
            raise ValueError(f"Page size must be positive: {self.width_px}x{self.height_px}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels, PIL order."""
        return (self.width_px, self.height_px)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width_px / self.height_px

    @property
    def width_pt(self) -> float:
        return px_to_pt(self.width_px, self.dpi)

    @property
    def height_pt(self) -> float:
        return px_to_pt(self.height_px, self.dpi)

    @property
    def orientation(self) -> Orientation:
        if self.width_px > self.height_px:
            return Orientation.LANDSCAPE
        return Orientation.PORTRAIT

    def transposed(self) -> "PageSpec":
        """Same page turned 90 degrees."""
        return PageSpec(self.height_px, self.width_px, self.dpi)

    def scaled(self, max_side: int) -> "PageSpec":
        """
        Smaller spec with the same aspect ratio, for previews.

        The longer side becomes max_side pixels; DPI is scaled by the
        same factor so the physical size is unchanged.

        Args:
            max_side: Target length of the longer side in pixels

        Returns:
            New PageSpec (never larger than this one)
        """
        if max_side <= 0:
            raise ValueError(f"max_side must be positive: {max_side}")
        factor = min(1.0, max_side / max(self.width_px, self.height_px))
        return PageSpec(
            width_px=max(1, int(round(self.width_px * factor))),
            height_px=max(1, int(round(self.height_px * factor))),
            dpi=max(1, int(round(self.dpi * factor))),
        )


def compute_page_spec(
    orientation: Union[Orientation, str],
    dpi: int = DEFAULT_DPI,
) -> PageSpec:
    """
    Compute A4 pixel dimensions for an orientation.

    Portrait at 300 DPI is 2480 x 3508; landscape is the exact transpose.

    Args:
        orientation: Portrait or landscape
        dpi: Print resolution

    Returns:
        PageSpec for the page
    """
    orientation = Orientation(orientation)
    short_side = mm_to_px(A4_WIDTH_MM, dpi)
    long_side = mm_to_px(A4_HEIGHT_MM, dpi)

    if orientation is Orientation.LANDSCAPE:
        return PageSpec(width_px=long_side, height_px=short_side, dpi=dpi)
    return PageSpec(width_px=short_side, height_px=long_side, dpi=dpi)
