"""
Module: config

Purpose:
    Configuration dataclass for exporting a contact sheet. Immutable
    configuration with validation on construction.

Key Classes:
    - ExportConfig: Layout, output name and encoding settings

Dependencies:
    - dataclasses (std)
    - layout.config: LayoutConfig

Used By:
    - controller: Export pipeline
    - cli: Built from command-line options
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from contact_sheet.images.source import DEFAULT_BACKGROUND
from contact_sheet.layout.config import LayoutConfig
from contact_sheet.output.encoder import DEFAULT_JPEG_QUALITY

DEFAULT_OUTPUT_NAME = "contact-sheet.pdf"


@dataclass(frozen=True)
class ExportConfig:
    """
    Configuration for exporting a sheet (immutable).

    Attributes:
        layout: DPI, margin and gutter
        output_name: File name written inside the output directory
        jpeg_quality: Quality used when embedding the raster (1-100)
        background: RGB page colour

    Example:
        >>> config = ExportConfig(output_name="holiday.pdf")
        >>> config.layout.dpi
        300
    """

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    output_name: str = DEFAULT_OUTPUT_NAME
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.output_name or self.output_name in (".", ".."):
            raise ValueError(f"output_name must be a file name: {self.output_name!r}")
        if "/" in self.output_name or "\\" in self.output_name:
            raise ValueError(f"output_name must not contain a directory: {self.output_name!r}")
        if not self.output_name.lower().endswith(".pdf"):
            raise ValueError(f"output_name must end with .pdf: {self.output_name!r}")
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError(f"jpeg_quality must be 1-100: {self.jpeg_quality}")
        if len(self.background) != 3 or not all(0 <= c <= 255 for c in self.background):
            raise ValueError(f"background must be an RGB triple: {self.background}")
