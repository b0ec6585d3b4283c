"""
Module: output

Purpose:
    Raster compositing and PDF output for the contact sheet.
    Renders a sheet snapshot onto a page raster and wraps it into a
    single-page PDF using ReportLab.

Key Functions:
    - render(): Composite slots into a page raster
    - render_preview(): Reduced-size raster with export geometry
    - encode(): Raster to single-page PDF
    - save(): Atomic document write

Dependencies:
    - reportlab: PDF generation
    - PIL: Image handling

Used By:
    - controller: Export pipeline
"""

from .rasterizer import render, render_preview
from .encoder import Document, encode, save

__all__ = [
    "render",
    "render_preview",
    "Document",
    "encode",
    "save",
]
