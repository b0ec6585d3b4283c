import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import contact_sheet
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


def encode_png(size=(200, 100), color="red", mode="RGB") -> bytes:
    """Encode a solid-colour image as PNG bytes."""
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


# Common test fixtures
@pytest.fixture
def png_bytes():
    """Factory for solid-colour PNG bytes."""
    return encode_png


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image on disk."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def nine_images(png_bytes):
    """Nine small distinct PNGs."""
    colors = ["red", "green", "blue", "yellow", "purple", "orange", "cyan", "magenta", "gray"]
    return [png_bytes((60 + 10 * i, 40), color) for i, color in enumerate(colors)]
