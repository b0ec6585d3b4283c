"""Top-level package for the Contact Sheet builder.

Provides subpackages:
- contact_sheet.core – sheet model, slot types and error taxonomy
- contact_sheet.layout – page size and 3x3 grid geometry
- contact_sheet.images – source reading, decoding and transforms
- contact_sheet.output – rasterizer and PDF encoder
"""

def _get_version() -> str:
    """Get version from installed metadata, or pyproject.toml in a source checkout."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    try:
        return pkg_version("contact-sheet")
    except PackageNotFoundError:
        pass

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
