"""
Core Models Package

Sheet state and the immutable slot values it is made of.

Slots are frozen dataclasses: every mutation on SheetModel swaps in an
updated copy, which is what makes SheetModel.snapshot() a cheap and
safe frozen view for the export pipeline.
"""

from .slots import (
    MAX_SCALE,
    MAX_SLOTS,
    MIN_SCALE,
    ImageSlot,
    Orientation,
    SheetSnapshot,
)
from .sheet import SCALE_STEP, SheetModel

__all__ = [
    "MAX_SLOTS",
    "MIN_SCALE",
    "MAX_SCALE",
    "SCALE_STEP",
    "ImageSlot",
    "Orientation",
    "SheetSnapshot",
    "SheetModel",
]
