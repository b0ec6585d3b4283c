"""
Unit tests for reading and decoding image sources.
"""

import io

import pytest
from PIL import Image, UnidentifiedImageError

from contact_sheet.core.errors import SourceReadError
from contact_sheet.images import decode_image, read_source


class TestReadSource:
    def test_bytes_have_no_name(self, png_bytes):
        data = png_bytes()
        assert read_source(data) == (data, None)

    def test_path_reads_file_and_name(self, sample_image):
        data, name = read_source(sample_image)
        assert data == sample_image.read_bytes()
        assert name == "sample.png"

    def test_open_file_uses_basename(self, sample_image):
        with open(sample_image, "rb") as f:
            data, name = read_source(f)
        assert name == "sample.png"
        assert data == sample_image.read_bytes()

    def test_text_stream_is_rejected(self):
        with pytest.raises(SourceReadError):
            read_source(io.StringIO("not an image"))

    def test_empty_source_is_rejected(self):
        with pytest.raises(SourceReadError):
            read_source(b"")

    def test_missing_file_is_rejected(self, tmp_path):
        with pytest.raises(SourceReadError):
            read_source(tmp_path / "nope.jpg")

    def test_unsupported_type_is_rejected(self):
        with pytest.raises(SourceReadError):
            read_source(12345)


class TestDecodeImage:
    def test_decodes_to_rgb(self, png_bytes):
        img = decode_image(png_bytes((30, 20), "blue", mode="L"))
        assert img.mode == "RGB"
        assert img.size == (30, 20)

    def test_transparency_is_flattened_onto_background(self, png_bytes):
        data = png_bytes((10, 10), (255, 0, 0, 0), mode="RGBA")
        img = decode_image(data, background=(0, 255, 0))
        assert img.getpixel((5, 5)) == (0, 255, 0)

    def test_exif_orientation_is_applied(self):
        img = Image.new("RGB", (40, 20), "red")
        exif = Image.Exif()
        exif[0x0112] = 6  # Rotate 90 CW on display
        buf = io.BytesIO()
        img.save(buf, format="JPEG", exif=exif)

        decoded = decode_image(buf.getvalue())
        assert decoded.size == (20, 40)

    def test_garbage_raises(self):
        with pytest.raises(UnidentifiedImageError):
            decode_image(b"definitely not an image")
