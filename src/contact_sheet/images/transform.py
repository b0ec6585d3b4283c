"""
Module: images.transform

Purpose:
    Geometry of one slot inside its cell: rotation, contain fit and the
    slot's scale factor. Sizes are computed separately from resampling
    so the placement maths can be checked without touching pixels.

Key Functions:
    - rotate_clockwise(): Rotate by a multiple of 90 degrees
    - contain_size(): Largest size that fits a box keeping aspect ratio
    - place_in_cell(): Final size and top-left for a slot image
    - transform_for_cell(): Rotate, fit and resample an image for a cell

Dependencies:
    - PIL: Transpose and resize

Used By:
    - output.rasterizer: Compositing
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from PIL import Image

if TYPE_CHECKING:
    from contact_sheet.layout.grid import CellRect

# PIL transposes are counter-clockwise, sheet rotations are clockwise
_CLOCKWISE_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def rotate_clockwise(img: Image.Image, degrees: int) -> Image.Image:
    """
    Rotate an image clockwise by 0, 90, 180 or 270 degrees.

    Quarter turns are lossless transposes; 90 and 270 swap width and
    height, so fitting must happen after rotation.
    """
    degrees %= 360
    if degrees == 0:
        return img
    try:
        method = _CLOCKWISE_TRANSPOSE[degrees]
    except KeyError:
        raise ValueError(f"rotation must be a multiple of 90: {degrees}") from None
    return img.transpose(method)


def contain_size(
    width: int,
    height: int,
    box_width: int,
    box_height: int,
) -> Tuple[int, int]:
    """
    Scale (width, height) uniformly to the largest size inside the box.

    Args:
        width: Source width
        height: Source height
        box_width: Target box width
        box_height: Target box height

    Returns:
        (width, height) never exceeding the box, each at least 1px

    Example:
        >>> contain_size(400, 200, 100, 100)
        (100, 50)
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive: {width}x{height}")
    ratio = min(box_width / width, box_height / height)
    return (max(1, int(round(width * ratio))), max(1, int(round(height * ratio))))


def place_in_cell(
    width: int,
    height: int,
    cell: CellRect,
    scale: float = 1.0,
) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """
    Size and position an (already rotated) image in a cell.

    The image is contain-fitted to the cell, multiplied by scale and
    centred on the cell centre. With scale > 1 the result extends past
    the cell into the gutter; nothing is clipped here.

    Args:
        width: Rotated image width
        height: Rotated image height
        cell: Target cell
        scale: Slot scale factor

    Returns:
        ((width, height), (left, top)) in page pixels
    """
    fit_width, fit_height = contain_size(width, height, cell.width, cell.height)
    final_width = max(1, int(round(fit_width * scale)))
    final_height = max(1, int(round(fit_height * scale)))

    center_x, center_y = cell.center
    left = int(round(center_x - final_width / 2))
    top = int(round(center_y - final_height / 2))
    return (final_width, final_height), (left, top)


def transform_for_cell(
    img: Image.Image,
    cell: CellRect,
    rotation: int = 0,
    scale: float = 1.0,
) -> Tuple[Image.Image, Tuple[int, int]]:
    """
    Rotate, fit and resample an image for drawing into a cell.

    Args:
        img: Decoded source image
        cell: Target cell
        rotation: Clockwise degrees
        scale: Slot scale factor

    Returns:
        (resampled image, (left, top) paste position)
    """
    rotated = rotate_clockwise(img, rotation)
    size, position = place_in_cell(rotated.width, rotated.height, cell, scale)
    if rotated.size != size:
        rotated = rotated.resize(size, Image.Resampling.LANCZOS)
    return rotated, position
