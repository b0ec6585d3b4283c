"""
Module: layout

Purpose:
    Page geometry for the contact sheet.
    Converts an orientation into page pixel dimensions and a 3x3 grid
    of cell rectangles.

Key Functions:
    - compute_page_spec(): A4 page size at print resolution
    - compute_grid(): Nine congruent cells on a page

Key Classes:
    - LayoutConfig: DPI, margin and gutter
    - PageSpec: Page pixel size
    - CellRect: One cell rectangle

Used By:
    - output.rasterizer: Compositing
    - controller: Export pipeline
"""

from .config import LayoutConfig
from .page import PageSpec, compute_page_spec, px_to_pt
from .grid import CELL_COUNT, CellRect, compute_grid

__all__ = [
    # Config
    "LayoutConfig",
    # Page
    "PageSpec",
    "compute_page_spec",
    "px_to_pt",
    # Grid
    "CELL_COUNT",
    "CellRect",
    "compute_grid",
]
