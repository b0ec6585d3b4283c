"""
Module: images.source

Purpose:
    Boundary between raw image sources and the sheet model. Sources
    are read to bytes when they are added to the sheet and decoded
    only when the sheet is rendered.

Key Functions:
    - read_source(): Read bytes from bytes, a path or a binary file-like
    - decode_image(): Decode slot bytes into an RGB PIL image

Dependencies:
    - PIL: Decoding and EXIF orientation

Used By:
    - core.models.sheet: add_images()
    - output.rasterizer: Slot decoding
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from PIL import Image, ImageOps

from contact_sheet.core.errors import SourceReadError

logger = logging.getLogger(__name__)

ImageSource = Union[bytes, bytearray, str, "os.PathLike[str]", BinaryIO]

SUPPORTED_EXTS = {".jpg", ".jpeg", ".png", ".webp", ".bmp", ".gif", ".tif", ".tiff"}

# White page background
DEFAULT_BACKGROUND = (255, 255, 255)


def read_source(source: ImageSource) -> Tuple[bytes, Optional[str]]:
    """
    Read an image source fully into memory.

    Args:
        source: Raw bytes, a filesystem path, or a binary file-like
            object with read()

    Returns:
        Tuple of (bytes, display name or None)

    Raises:
        SourceReadError: If the source is empty or cannot be read

    Example:
        >>> data, name = read_source(Path("holiday.jpg"))
        >>> name
        'holiday.jpg'
    """
    if isinstance(source, (bytes, bytearray)):
        data, name = bytes(source), None
    elif isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise SourceReadError(f"Cannot read image file {path}: {e}") from e
        name = path.name
    elif hasattr(source, "read"):
        try:
            data = source.read()
        except OSError as e:
            raise SourceReadError(f"Cannot read image stream: {e}") from e
        if not isinstance(data, (bytes, bytearray)):
            raise SourceReadError("Image stream must be opened in binary mode")
        data = bytes(data)
        raw_name = getattr(source, "name", None)
        name = Path(raw_name).name if isinstance(raw_name, str) else None
    else:
        raise SourceReadError(f"Unsupported image source type: {type(source).__name__}")

    if not data:
        raise SourceReadError(f"Image source {name or '<bytes>'} is empty")

    logger.debug(f"Read {len(data)} bytes from {name or 'in-memory source'}")
    return data, name


def decode_image(
    data: bytes,
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND,
) -> Image.Image:
    """
    Decode encoded image bytes into an RGB image.

    Applies the EXIF orientation tag and flattens any transparency onto
    the background colour, so the result can be pasted directly onto
    the page raster.

    Args:
        data: Encoded image bytes
        background: RGB colour used behind transparent pixels

    Returns:
        Fully loaded RGB PIL Image

    Raises:
        UnidentifiedImageError: If PIL cannot identify the format
        OSError: If the image data is truncated or corrupt
    """
    with Image.open(io.BytesIO(data)) as img:
        img.load()
        img = ImageOps.exif_transpose(img)

        if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
            rgba = img.convert("RGBA")
            flat = Image.new("RGB", rgba.size, background)
            flat.paste(rgba, mask=rgba.getchannel("A"))
            return flat
        if img.mode != "RGB":
            return img.convert("RGB")
        return img.copy()
