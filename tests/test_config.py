"""
Unit tests for ExportConfig validation.
"""

import pytest

from contact_sheet.config import DEFAULT_OUTPUT_NAME, ExportConfig


class TestExportConfig:
    def test_defaults(self):
        config = ExportConfig()
        assert config.output_name == DEFAULT_OUTPUT_NAME == "contact-sheet.pdf"
        assert config.jpeg_quality == 100
        assert config.layout.dpi == 300
        assert config.background == (255, 255, 255)

    @pytest.mark.parametrize("name", ["", "..", "out/sheet.pdf", "sheet.png"])
    def test_rejects_bad_output_names(self, name):
        with pytest.raises(ValueError):
            ExportConfig(output_name=name)

    @pytest.mark.parametrize("quality", [0, 101])
    def test_rejects_bad_quality(self, quality):
        with pytest.raises(ValueError):
            ExportConfig(jpeg_quality=quality)

    def test_rejects_bad_background(self):
        with pytest.raises(ValueError):
            ExportConfig(background=(0, 0, 300))
