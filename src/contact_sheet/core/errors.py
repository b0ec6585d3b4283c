"""
Module: core.errors

Purpose:
    Exception taxonomy for the contact sheet builder. Every failure the
    model or the export pipeline can report derives from ContactSheetError
    so callers can catch the whole family in one place.

Key Classes:
    - ContactSheetError: Base class
    - CapacityExceeded, SlotIndexError, SourceReadError: Model errors
    - EmptyModel, ExportInProgress, ExportCancelled: Export admission
    - RenderFailure, EncodeFailure, WriteFailure: Pipeline stage failures

Used By:
    - core.models.sheet: Mutation errors
    - output.rasterizer / output.encoder: Stage failures
    - controller: Export admission and event reporting
"""

from __future__ import annotations

from typing import Optional


class ContactSheetError(Exception):
    """Base class for all contact sheet errors."""

    @property
    def kind(self) -> str:
        """Short error kind name reported in status events."""
        return type(self).__name__


class CapacityExceeded(ContactSheetError):
    """Adding images would push the sheet past its nine slots."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Cannot add {requested} image(s): only {available} slot(s) left"
        )
        self.requested = requested
        self.available = available


class SlotIndexError(ContactSheetError, IndexError):
    """Slot index outside 0 <= index < count."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Slot index {index} out of range for {count} slot(s)")
        self.index = index
        self.count = count


class SourceReadError(ContactSheetError):
    """An image source could not be read into memory."""


class EmptyModel(ContactSheetError):
    """Export requested for a sheet with no images."""

    def __init__(self) -> None:
        super().__init__("Add some images before exporting")


class RenderFailure(ContactSheetError):
    """A slot image could not be decoded or drawn."""

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.index = index


class EncodeFailure(ContactSheetError):
    """The raster could not be assembled into a document."""


class WriteFailure(ContactSheetError):
    """The encoded document could not be persisted."""


class ExportInProgress(ContactSheetError):
    """Another export is still running."""

    def __init__(self) -> None:
        super().__init__("An export is already in progress")


class ExportCancelled(ContactSheetError):
    """The export was abandoned before the artifact was finalized."""
