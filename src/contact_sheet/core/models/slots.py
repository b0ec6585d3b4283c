"""
Module: core.models.slots

Purpose:
    Immutable value types for sheet slots. Rotation and scale are plain
    numeric fields; the rasterizer is responsible for interpreting them.

Key Classes:
    - Orientation: Portrait or landscape page
    - ImageSlot: One image and its transform
    - SheetSnapshot: Frozen copy of a sheet taken at export start

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.sheet: SheetModel stores ImageSlots
    - output.rasterizer: Draws SheetSnapshot slots
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

MAX_SLOTS = 9
MIN_SCALE = 0.1
MAX_SCALE = 2.0
DEFAULT_SCALE = 1.0
ROTATION_STEP = 90
VALID_ROTATIONS = (0, 90, 180, 270)


class Orientation(str, Enum):
    """Page orientation."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

    @property
    def flipped(self) -> "Orientation":
        """The other orientation."""
        if self is Orientation.PORTRAIT:
            return Orientation.LANDSCAPE
        return Orientation.PORTRAIT


def clamp_scale(value: float) -> float:
    """Clamp a scale factor into [MIN_SCALE, MAX_SCALE]."""
    return max(MIN_SCALE, min(MAX_SCALE, value))


@dataclass(frozen=True, slots=True)
class ImageSlot:
    """
    One image in the sheet with its transform (immutable).

    Mutations on the sheet replace the slot with an updated copy, so a
    snapshot holding the old slot never observes later changes.

    Attributes:
        source: Encoded image bytes (PNG, JPEG, ...), owned by this slot
        rotation: Clockwise rotation in degrees, one of 0/90/180/270
        scale: Multiplier on the contain-fit size, 0.1 to 2.0
        name: Optional display label such as the original file name

    Invariants:
        - rotation in VALID_ROTATIONS
        - MIN_SCALE <= scale <= MAX_SCALE

    Example:
        >>> slot = ImageSlot(source=png_bytes)
        >>> slot.rotated().rotation
        90
    """

    source: bytes
    rotation: int = 0
    scale: float = DEFAULT_SCALE
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate transform fields on construction."""
        if self.rotation not in VALID_ROTATIONS:
            raise ValueError(f"rotation must be one of {VALID_ROTATIONS}: {self.rotation}")
        if not MIN_SCALE <= self.scale <= MAX_SCALE:
            raise ValueError(f"scale must be within [{MIN_SCALE}, {MAX_SCALE}]: {self.scale}")

    def rotated(self) -> "ImageSlot":
        """Copy rotated a further 90 degrees clockwise."""
        return ImageSlot(
            source=self.source,
            rotation=(self.rotation + ROTATION_STEP) % 360,
            scale=self.scale,
            name=self.name,
        )

    def rescaled(self, delta: float) -> "ImageSlot":
        """Copy with scale moved by delta, clamped silently."""
        # Round away float drift from repeated 0.1 steps
        new_scale = clamp_scale(round(self.scale + delta, 6))
        return ImageSlot(
            source=self.source,
            rotation=self.rotation,
            scale=new_scale,
            name=self.name,
        )

    def __repr__(self) -> str:
        return (
            f"ImageSlot(name={self.name!r}, bytes={len(self.source)}, "
            f"rotation={self.rotation}, scale={self.scale})"
        )


@dataclass(frozen=True)
class SheetSnapshot:
    """
    Frozen copy of a sheet's slots and orientation.

    Attributes:
        slots: Slots in sheet order (index 0 is the top-left cell)
        orientation: Page orientation at snapshot time
    """

    slots: tuple[ImageSlot, ...]
    orientation: Orientation = Orientation.PORTRAIT

    @property
    def count(self) -> int:
        """Number of occupied slots."""
        return len(self.slots)

    @property
    def is_empty(self) -> bool:
        """Check if the snapshot holds no images."""
        return len(self.slots) == 0
