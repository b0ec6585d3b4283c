"""
Module: core.models.sheet

Purpose:
    SheetModel: the ordered collection of up to nine image slots plus
    the page orientation. All mutators are synchronous and either fully
    succeed or leave the model untouched.

Key Classes:
    - SheetModel: Mutable sheet state for one editing session

Dependencies:
    - core.models.slots: ImageSlot, Orientation, SheetSnapshot
    - images.source: read_source()

Used By:
    - controller: Snapshots the model at export start
    - cli: Builds a sheet from command-line arguments
"""

from __future__ import annotations

import io
import logging
import os
from typing import Iterable, Iterator, List, Union

from contact_sheet.core.errors import CapacityExceeded, SlotIndexError
from contact_sheet.images.source import ImageSource, read_source

from .slots import MAX_SLOTS, ImageSlot, Orientation, SheetSnapshot

logger = logging.getLogger(__name__)

# Increment used by the +/- scale controls
SCALE_STEP = 0.1


class SheetModel:
    """
    Ordered slots (at most nine) and page orientation.

    Slot positions are implicit: index 0 is the top-left cell, index 8
    the bottom-right. Removing a slot shifts the later ones down while
    keeping their relative order.

    Example:
        >>> sheet = SheetModel()
        >>> sheet.add_images([Path("a.jpg"), Path("b.jpg")])
        >>> sheet.rotate_image(1)
        >>> sheet[1].rotation
        90
    """

    def __init__(self, orientation: Orientation = Orientation.PORTRAIT) -> None:
        self._slots: List[ImageSlot] = []
        self._orientation = Orientation(orientation)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def slots(self) -> tuple[ImageSlot, ...]:
        """Current slots in order."""
        return tuple(self._slots)

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @property
    def count(self) -> int:
        return len(self._slots)

    @property
    def is_empty(self) -> bool:
        return not self._slots

    @property
    def is_full(self) -> bool:
        return len(self._slots) >= MAX_SLOTS

    @property
    def remaining_capacity(self) -> int:
        """Number of images that can still be added."""
        return MAX_SLOTS - len(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> ImageSlot:
        self._check_index(index)
        return self._slots[index]

    def __iter__(self) -> Iterator[ImageSlot]:
        return iter(tuple(self._slots))

    def snapshot(self) -> SheetSnapshot:
        """
        Take a frozen copy of the slots and orientation.

        Slots are immutable, so later mutation replaces list entries
        and never reaches the snapshot.
        """
        return SheetSnapshot(slots=tuple(self._slots), orientation=self._orientation)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def add_images(self, sources: Iterable[ImageSource]) -> None:
        """
        Append images to the end of the sheet, all or nothing.

        Every source is read before the model is touched, so a
        capacity or read failure leaves the sheet exactly as it was.

        Args:
            sources: Raw bytes, paths or binary file-like objects

        Raises:
            CapacityExceeded: If count + len(sources) > 9
            SourceReadError: If any source cannot be read
            TypeError: If a single source is passed instead of a collection
        """
        if isinstance(sources, (bytes, bytearray, memoryview, str, os.PathLike, io.IOBase)):
            raise TypeError(
                f"add_images() takes a collection of sources, not a single "
                f"{type(sources).__name__}; wrap it in a list"
            )
        sources = list(sources)
        if len(self._slots) + len(sources) > MAX_SLOTS:
            logger.warning(
                f"Rejected {len(sources)} image(s): {self.remaining_capacity} slot(s) left"
            )
            raise CapacityExceeded(len(sources), self.remaining_capacity)

        new_slots = []
        for source in sources:
            data, name = read_source(source)
            new_slots.append(ImageSlot(source=data, name=name))

        self._slots.extend(new_slots)
        logger.debug(f"Added {len(new_slots)} image(s), sheet now holds {len(self._slots)}")

    def remove_image(self, index: int) -> None:
        """Remove the slot at index; later slots shift down by one."""
        self._check_index(index)
        removed = self._slots.pop(index)
        logger.debug(f"Removed slot {index} ({removed.name or 'unnamed'})")

    def rotate_image(self, index: int) -> None:
        """Rotate slot a further 90 degrees clockwise (mod 360)."""
        self._check_index(index)
        self._slots[index] = self._slots[index].rotated()

    def adjust_scale(self, index: int, delta: float) -> None:
        """Move slot scale by delta, silently clamped to [0.1, 2.0]."""
        self._check_index(index)
        self._slots[index] = self._slots[index].rescaled(delta)

    def increase_scale(self, index: int) -> None:
        self.adjust_scale(index, SCALE_STEP)

    def decrease_scale(self, index: int) -> None:
        self.adjust_scale(index, -SCALE_STEP)

    def set_orientation(self, value: Union[Orientation, str]) -> None:
        """Set page orientation. Slot transforms are untouched."""
        self._orientation = Orientation(value)

    def toggle_orientation(self) -> Orientation:
        """Switch between portrait and landscape; returns the new value."""
        self._orientation = self._orientation.flipped
        return self._orientation

    def clear(self) -> None:
        """Remove every slot."""
        self._slots.clear()

    def _check_index(self, index: int) -> None:
        if not isinstance(index, int) or not 0 <= index < len(self._slots):
            raise SlotIndexError(index, len(self._slots))

    def __repr__(self) -> str:
        return f"SheetModel(count={len(self._slots)}, orientation={self._orientation.value})"
