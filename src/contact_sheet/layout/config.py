"""
Module: layout.config

Purpose:
    Configuration for sheet layout.
    Defines print resolution, page margin and inter-cell gutter.

Key Classes:
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)

Used By:
    - layout.page: DPI for page size
    - layout.grid: Margin and gutter
    - config.ExportConfig: Export settings
"""

from __future__ import annotations

from dataclasses import dataclass


# Print resolution
DEFAULT_DPI = 300

# 10mm margin and 5mm gutter at 300 DPI
DEFAULT_MARGIN_PX = 118
DEFAULT_GUTTER_PX = 59


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for sheet layout (immutable).

    Margin and gutter are expressed in pixels at `dpi`. When a layout is
    rendered at another resolution (e.g. a preview), use scaled().

    Attributes:
        dpi: Dots per inch for the exported page
        margin_px: Blank border on every page edge (px)
        gutter_px: Space between adjacent cells (px)

    Example:
        >>> config = LayoutConfig()
        >>> config.margin_px
        118
    """

    dpi: int = DEFAULT_DPI
    margin_px: int = DEFAULT_MARGIN_PX
    gutter_px: int = DEFAULT_GUTTER_PX

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.dpi <= 0:
            raise ValueError(f"dpi must be positive: {self.dpi}")
        if self.margin_px < 0:
            raise ValueError(f"margin_px must be non-negative: {self.margin_px}")
        if self.gutter_px < 0:
            raise ValueError(f"gutter_px must be non-negative: {self.gutter_px}")

    def scaled(self, factor: float) -> "LayoutConfig":
        """Config with margin and gutter scaled by factor (DPI unchanged)."""
        return LayoutConfig(
            dpi=self.dpi,
            margin_px=int(round(self.margin_px * factor)),
            gutter_px=int(round(self.gutter_px * factor)),
        )
