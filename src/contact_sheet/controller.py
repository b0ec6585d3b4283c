"""
Module: controller

Purpose:
    Orchestrate the contact sheet export pipeline.
    Snapshot → PageSpec → Grid → Render → Encode → Save

    export_sheet() runs the pipeline synchronously. SheetExporter runs
    it on a background worker, one export at a time, reporting
    started / succeeded / failed events to a listener while the sheet
    stays free for further editing.

Key Functions:
    - export_sheet(): Synchronous pipeline for a frozen snapshot

Key Classes:
    - SheetExporter: Single-flight background exporter
    - ExportResult: Outcome of a successful export
    - ExportEvent / ExportStatus: Status notifications

Dependencies:
    - layout: Page and grid geometry
    - output: Rasterizer and PDF encoder
    - concurrent.futures: Background worker

Used By:
    - cli: Command-line export
"""

from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from contact_sheet.config import ExportConfig
from contact_sheet.core.errors import (
    ContactSheetError,
    EmptyModel,
    ExportCancelled,
    ExportInProgress,
    RenderFailure,
)
from contact_sheet.core.models.sheet import SheetModel
from contact_sheet.core.models.slots import Orientation, SheetSnapshot
from contact_sheet.layout.grid import compute_grid
from contact_sheet.layout.page import PageSpec, compute_page_spec
from contact_sheet.output.encoder import encode, save
from contact_sheet.output.rasterizer import render

logger = logging.getLogger(__name__)


class ExportStatus(str, Enum):
    """Lifecycle events of one export."""

    STARTED = "started"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of a successful export (immutable).

    Attributes:
        output_path: Written PDF
        page: Page geometry used
        image_count: Number of images on the sheet
        orientation: Page orientation
        size_bytes: PDF file size
        elapsed_s: Wall time of the pipeline in seconds
    """

    output_path: Path
    page: PageSpec
    image_count: int
    orientation: Orientation
    size_bytes: int
    elapsed_s: float


@dataclass(frozen=True)
class ExportEvent:
    """
    Status notification sent to an export listener.

    Attributes:
        status: Which lifecycle point was reached
        result: Set on SUCCEEDED
        error: Set on FAILED
    """

    status: ExportStatus
    result: Optional[ExportResult] = None
    error: Optional[BaseException] = None

    @property
    def error_kind(self) -> Optional[str]:
        """Error class name on FAILED, e.g. 'RenderFailure'."""
        if self.error is None:
            return None
        return type(self.error).__name__


ExportListener = Callable[[ExportEvent], None]


def export_sheet(
    snapshot: SheetSnapshot,
    output_path: Union[str, os.PathLike],
    config: Optional[ExportConfig] = None,
    *,
    cancel_event: Optional[threading.Event] = None,
) -> ExportResult:
    """
    Export a frozen sheet snapshot to a single-page PDF.

    Pipeline:
    1. Page size for the snapshot orientation
    2. 3x3 grid inside the configured margin
    3. Render slots onto the page raster
    4. Encode the raster as a PDF
    5. Atomically write the file

    Args:
        snapshot: Frozen sheet state
        output_path: Destination PDF path
        config: Export configuration (defaults to ExportConfig())
        cancel_event: When set, the export stops before the file is written

    Returns:
        ExportResult describing the written file

    Raises:
        EmptyModel: If the snapshot holds no images
        RenderFailure: If an image cannot be decoded or the layout does not fit
        EncodeFailure: If the PDF cannot be assembled
        WriteFailure: If the file cannot be written
        ExportCancelled: If cancel_event was set mid-export

    Example:
        >>> result = export_sheet(sheet.snapshot(), Path("out/contact-sheet.pdf"))
        >>> result.page.size
        (2480, 3508)
    """
    if snapshot.is_empty:
        raise EmptyModel()

    config = config or ExportConfig()
    start_time = time.perf_counter()

    logger.info(
        f"Exporting {snapshot.count} image(s) in {snapshot.orientation.value} to {output_path}"
    )

    # 1-2. Geometry
    page = compute_page_spec(snapshot.orientation, config.layout.dpi)
    try:
        grid = compute_grid(page, config.layout.margin_px, config.layout.gutter_px)
    except ValueError as e:
        raise RenderFailure(f"Layout does not fit the page: {e}") from e

    # 3. Render
    _check_cancelled(cancel_event)
    raster = render(snapshot, grid, page, background=config.background)

    # 4. Encode
    try:
        _check_cancelled(cancel_event)
        document = encode(raster, page, quality=config.jpeg_quality)
    finally:
        raster.close()

    # 5. Write
    _check_cancelled(cancel_event)
    written = save(document, output_path, cancel_event=cancel_event)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Export completed in {elapsed:.2f}s")

    return ExportResult(
        output_path=written,
        page=page,
        image_count=snapshot.count,
        orientation=snapshot.orientation,
        size_bytes=document.size_bytes,
        elapsed_s=elapsed,
    )


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        logger.warning("Export cancelled, no file written")
        raise ExportCancelled("Export was cancelled before completion")


class SheetExporter:
    """
    Runs exports in the background, one at a time.

    export() snapshots the sheet immediately, so edits made while the
    export runs never reach the output. A second export() while one is
    pending is rejected with ExportInProgress.

    Usage:
        with SheetExporter(Path("output"), listener=on_status) as exporter:
            future = exporter.export(sheet)
            sheet.rotate_image(0)  # does not affect the running export
            result = future.result()

    Attributes:
        output_dir: Directory the PDF is written to
        config: Export configuration
    """

    def __init__(
        self,
        output_dir: Union[str, os.PathLike],
        config: Optional[ExportConfig] = None,
        listener: Optional[ExportListener] = None,
    ) -> None:
        """
        Initialize exporter.

        Args:
            output_dir: Directory for the exported PDF
            config: Export configuration (defaults to ExportConfig())
            listener: Called with an ExportEvent at each lifecycle point
        """
        self.output_dir = Path(output_dir)
        self.config = config or ExportConfig()
        self._listener = listener
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="contact-sheet-export")
        self._lock = threading.Lock()
        self._busy = False
        self._closed = False
        self._cancel_event = threading.Event()

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.config.output_name

    @property
    def is_busy(self) -> bool:
        """True while an export is pending or running."""
        with self._lock:
            return self._busy

    def export(self, sheet: Union[SheetModel, SheetSnapshot]) -> "Future[ExportResult]":
        """
        Start exporting the sheet in the background.

        Args:
            sheet: Live sheet (snapshotted now) or an existing snapshot

        Returns:
            Future resolving to the ExportResult, or raising the
            pipeline error

        Raises:
            EmptyModel: If the sheet has no images
            ExportInProgress: If another export has not finished
            RuntimeError: If the exporter has been shut down
        """
        snapshot = sheet.snapshot() if isinstance(sheet, SheetModel) else sheet
        if snapshot.is_empty:
            logger.warning("Export requested with no images")
            raise EmptyModel()

        with self._lock:
            if self._closed:
                raise RuntimeError("Exporter has been shut down")
            if self._busy:
                logger.warning("Export rejected: another export is in progress")
                raise ExportInProgress()
            self._busy = True

        self._emit(ExportEvent(ExportStatus.STARTED))
        try:
            future = self._executor.submit(self._run, snapshot, self.output_path)
        except RuntimeError as e:
            self._set_idle()
            self._emit(ExportEvent(ExportStatus.FAILED, error=e))
            raise
        future.add_done_callback(self._on_done)
        return future

    def shutdown(self, *, cancel: bool = False, wait: bool = True) -> None:
        """
        Stop accepting exports.

        Args:
            cancel: Abandon running and queued exports before their file
                is written; their futures raise ExportCancelled
            wait: Block until the worker has finished
        """
        with self._lock:
            self._closed = True
        if cancel:
            self._cancel_event.set()
        # Queued exports still run and stop at their first cancel check
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "SheetExporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(cancel=exc_type is not None)

    def _run(self, snapshot: SheetSnapshot, output_path: Path) -> ExportResult:
        try:
            result = export_sheet(
                snapshot,
                output_path,
                self.config,
                cancel_event=self._cancel_event,
            )
        except ContactSheetError as e:
            logger.error(f"Export failed ({e.kind}): {e}")
            self._set_idle()
            self._emit(ExportEvent(ExportStatus.FAILED, error=e))
            raise
        except Exception as e:
            logger.exception("Export failed unexpectedly")
            self._set_idle()
            self._emit(ExportEvent(ExportStatus.FAILED, error=e))
            raise

        self._set_idle()
        self._emit(ExportEvent(ExportStatus.SUCCEEDED, result=result))
        return result

    def _on_done(self, future: "Future[ExportResult]") -> None:
        if not future.cancelled():
            return
        logger.warning("Export future cancelled before it started")
        self._set_idle()
        error = ExportCancelled("Export was cancelled before it started")
        self._emit(ExportEvent(ExportStatus.FAILED, error=error))

    def _set_idle(self) -> None:
        with self._lock:
            self._busy = False

    def _emit(self, event: ExportEvent) -> None:
        if self._listener is None:
            return
        try:
            self._listener(event)
        except Exception:
            logger.exception(f"Export listener raised on {event.status.value} event")
