"""
Core package: sheet model, slot value types and the error taxonomy.

Models live in contact_sheet.core.models; only the errors are
re-exported here so low-level modules can import them without pulling
in the sheet model.
"""

from .errors import (
    CapacityExceeded,
    ContactSheetError,
    EmptyModel,
    EncodeFailure,
    ExportCancelled,
    ExportInProgress,
    RenderFailure,
    SlotIndexError,
    SourceReadError,
    WriteFailure,
)

__all__ = [
    "ContactSheetError",
    "CapacityExceeded",
    "SlotIndexError",
    "SourceReadError",
    "EmptyModel",
    "RenderFailure",
    "EncodeFailure",
    "WriteFailure",
    "ExportInProgress",
    "ExportCancelled",
]
