"""
Tests for the command-line front end.
"""

from unittest.mock import patch

import pytest
from PIL import Image
from pypdf import PdfReader

from contact_sheet.cli import build_parser, collect_images, main


@pytest.fixture
def image_dir(tmp_path):
    folder = tmp_path / "photos"
    folder.mkdir()
    for i, color in enumerate(["red", "green", "blue"]):
        Image.new("RGB", (120, 80), color).save(folder / f"{i:02d}.png")
    (folder / "notes.txt").write_text("not an image")
    return folder


class TestParser:
    def test_rotate_and_scale_specs(self, tmp_path):
        args = build_parser().parse_args(
            ["a.png", "--rotate", "2", "--rotate", "1:3", "--scale", "3:-0.4"]
        )
        assert args.rotate == [(1, 1), (0, 3)]
        assert args.scale == [(2, -0.4)]

    @pytest.mark.parametrize("spec", ["0", "10", "x"])
    def test_invalid_slot_is_usage_error(self, spec):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["a.png", "--rotate", spec])
        assert exc_info.value.code == 2

    def test_scale_requires_delta(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.png", "--scale", "1"])


class TestCollectImages:
    def test_directories_expand_to_sorted_images(self, image_dir):
        files = collect_images([image_dir])
        assert [f.name for f in files] == ["00.png", "01.png", "02.png"]


class TestMain:
    def test_exports_landscape_sheet(self, image_dir, tmp_path, capsys):
        out_dir = tmp_path / "out"

        code = main([str(image_dir), "-o", str(out_dir), "--landscape", "--rotate", "1"])

        assert code == 0
        target = out_dir / "contact-sheet.pdf"
        assert capsys.readouterr().out.strip() == str(target)
        page = PdfReader(target).pages[0]
        assert page.images[0].image.size == (3508, 2480)

    def test_writes_preview(self, image_dir, tmp_path):
        preview = tmp_path / "preview.png"

        code = main([str(image_dir), "-o", str(tmp_path), "--preview", str(preview)])

        assert code == 0
        with Image.open(preview) as img:
            assert max(img.size) == 800
            assert img.height > img.width

    def test_too_many_images_fails(self, tmp_path):
        paths = []
        for i in range(10):
            path = tmp_path / f"{i}.png"
            Image.new("RGB", (10, 10)).save(path)
            paths.append(str(path))

        assert main(paths + ["-o", str(tmp_path / "out")]) == 1
        assert not (tmp_path / "out").exists()

    def test_rotating_missing_slot_fails(self, image_dir, tmp_path):
        assert main([str(image_dir), "-o", str(tmp_path), "--rotate", "9"]) == 1

    def test_bad_output_name_is_usage_error(self, image_dir):
        with pytest.raises(SystemExit) as exc_info:
            main([str(image_dir), "--name", "sheet.png"])
        assert exc_info.value.code == 2

    def test_unreadable_image_directory_is_reported(self, image_dir, tmp_path, caplog):
        with patch("contact_sheet.cli.collect_images", side_effect=PermissionError("denied")):
            code = main([str(image_dir), "-o", str(tmp_path / "out")])

        assert code == 1
        assert "reading images" in caplog.text
        assert "denied" in caplog.text
        assert not (tmp_path / "out").exists()
