import pytest
import struct
import sys
import zlib
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import icon_packer
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from icon_packer.core.models import PixelImage


# Common test fixtures
@pytest.fixture
def make_image():
    """Factory for solid-colour PixelImages."""
    def _make(width: int, height: int | None = None, mode: str = "RGBA", color="red") -> PixelImage:
        height = width if height is None else height
        if mode in ("L", "LA") and isinstance(color, str):
            color = 128 if mode == "L" else (128, 255)
        return PixelImage.from_pil(Image.new(mode, (width, height), color=color))
    return _make


@pytest.fixture
def write_png(tmp_path: Path):
    """Factory writing a solid-colour PNG into tmp_path and returning its path."""
    def _write(name: str, size: int, mode: str = "RGBA", color="red") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, (size, size), color=color).save(path)
        return path
    return _write


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


@pytest.fixture
def oversized_png():
    """PNG bytes whose IHDR declares 20000x20000 RGBA; Pillow refuses it on open."""
    header = struct.pack(">IIBBBBB", 20000, 20000, 8, 6, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(b"\x00"))
        + _png_chunk(b"IEND", b"")
    )
