"""
Module: output.encoder

Purpose:
    Wrap a page raster into a single-page PDF using ReportLab and write
    it to disk atomically. The page is sized from the PageSpec (pixels
    interpreted at its DPI), and the raster is drawn at exactly that
    size, so nothing is auto-fitted by the PDF layer.

Key Functions:
    - encode(): Raster + PageSpec -> in-memory Document
    - save(): Atomic write of a Document

Key Classes:
    - Document: Encoded single-page PDF

Dependencies:
    - reportlab: PDF generation
    - PIL: JPEG encoding of the raster
    - layout.page: PageSpec

Used By:
    - controller: Export pipeline
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from contact_sheet.core.errors import EncodeFailure, ExportCancelled, WriteFailure
from contact_sheet.layout.page import PageSpec

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 100
DOCUMENT_TITLE = "Contact Sheet"


@dataclass(frozen=True)
class Document:
    """
    Encoded single-page PDF held in memory (immutable).

    Attributes:
        data: Complete PDF file bytes
        page: PageSpec the page was sized from

    Example:
        >>> doc = encode(raster, page)
        >>> round(doc.width_pt, 1), round(doc.height_pt, 1)
        (595.2, 841.9)
    """

    data: bytes
    page: PageSpec

    @property
    def width_pt(self) -> float:
        return self.page.width_pt

    @property
    def height_pt(self) -> float:
        return self.page.height_pt

    @property
    def size_bytes(self) -> int:
        return len(self.data)


def encode(
    buffer: Image.Image,
    page: PageSpec,
    *,
    quality: int = DEFAULT_JPEG_QUALITY,
    title: Optional[str] = DOCUMENT_TITLE,
) -> Document:
    """
    Encode a page raster as a single-page PDF.

    The raster is JPEG-encoded once (quality 100, no chroma subsampling)
    and embedded as-is; ReportLab passes JPEG data through without
    recompressing it.

    Args:
        buffer: RGB raster exactly page.size
        page: Target page
        quality: JPEG quality (1-100)
        title: PDF title metadata

    Returns:
        Document with the full PDF bytes

    Raises:
        EncodeFailure: If the raster does not match the page or encoding fails
    """
    if buffer.size != page.size:
        raise EncodeFailure(
            f"Raster is {buffer.width}x{buffer.height}, page expects "
            f"{page.width_px}x{page.height_px}"
        )
    if not 1 <= quality <= 100:
        raise EncodeFailure(f"JPEG quality must be 1-100: {quality}")

    try:
        img_reader = _pil_to_reader(buffer, quality, page.dpi)

        out = io.BytesIO()
        c = canvas.Canvas(out, pagesize=(page.width_pt, page.height_pt))
        if title:
            c.setTitle(title)
        c.setCreator("contact-sheet")
        c.drawImage(img_reader, 0, 0, width=page.width_pt, height=page.height_pt)
        c.showPage()
        c.save()
    except Exception as e:
        raise EncodeFailure(f"Failed to encode PDF: {e}") from e

    data = out.getvalue()
    logger.debug(
        f"Encoded {page.width_px}x{page.height_px} raster into "
        f"{page.width_pt:.1f}x{page.height_pt:.1f}pt page ({len(data)} bytes)"
    )
    return Document(data=data, page=page)


def save(
    document: Document,
    path: Union[str, os.PathLike],
    *,
    cancel_event: Optional[threading.Event] = None,
) -> Path:
    """
    Write a document to path atomically.

    The bytes go to a temporary file in the target directory which
    then replaces the destination, so readers never see a partial
    file and a failure leaves no temporary behind.

    Args:
        document: Encoded document
        path: Destination file path
        cancel_event: If set once the bytes are on disk, the temporary
            file is discarded and the destination is left untouched

    Returns:
        Resolved destination path

    Raises:
        WriteFailure: If the directory or file cannot be written
        ExportCancelled: If cancel_event was set before the replace

    Example:
        >>> save(doc, Path("output/contact-sheet.pdf"))
        PosixPath('output/contact-sheet.pdf')
    """
    path = Path(path)
    temp_path: Optional[Path] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="wb",
            prefix=f".{path.stem}-",
            suffix=".tmp",
            dir=path.parent,
            delete=False,
        ) as f:
            temp_path = Path(f.name)
            f.write(document.data)
            f.flush()
            os.fsync(f.fileno())
        if cancel_event is not None and cancel_event.is_set():
            temp_path.unlink(missing_ok=True)
            logger.warning(f"Write of {path} cancelled, temporary file removed")
            raise ExportCancelled("Export was cancelled before the file was replaced")
        temp_path.replace(path)
    except OSError as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise WriteFailure(f"Failed to write {path}: {e}") from e

    logger.info(f"Wrote {document.size_bytes} bytes to {path}")
    return path


def _pil_to_reader(img: Image.Image, quality: int, dpi: int) -> ImageReader:
    """
    Convert PIL image to a JPEG-backed ReportLab ImageReader.

    Args:
        img: RGB raster
        quality: JPEG quality
        dpi: Resolution stored in the JPEG header

    Returns:
        ImageReader for use with ReportLab
    """
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=quality, subsampling=0, dpi=(dpi, dpi))
    buf.seek(0)
    return ImageReader(buf)
