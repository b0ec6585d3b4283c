"""
Module: images

Purpose:
    Image access and transforms for the contact sheet.
    Reads raw sources into slot bytes, decodes them at render time and
    computes rotated, contain-fitted placements inside grid cells.

Key Functions:
    - read_source(): Bytes from a path, stream or raw bytes
    - decode_image(): RGB image from slot bytes
    - transform_for_cell(): Rotated and fitted image for a cell

Dependencies:
    - PIL: Image manipulation

Used By:
    - core.models.sheet: Adding images
    - output.rasterizer: Compositing
"""

from .source import SUPPORTED_EXTS, ImageSource, decode_image, read_source
from .transform import contain_size, place_in_cell, rotate_clockwise, transform_for_cell

__all__ = [
    "SUPPORTED_EXTS",
    "ImageSource",
    "read_source",
    "decode_image",
    "contain_size",
    "place_in_cell",
    "rotate_clockwise",
    "transform_for_cell",
]
