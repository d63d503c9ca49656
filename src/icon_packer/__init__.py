"""Top-level package for icon-packer.

Provides subpackages:
- icon_packer.core – slot catalog and pixel image models
- icon_packer.packer – classification, dedup, resampling and ICNS serialization
- icon_packer.bundle – icon file handling and the actool catalog path
- icon_packer.cli – command line entry point
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("icon-packer")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 The icon-packer contributors. Licensed under the MIT License"
__all__: list[str] = ["__version__"]
