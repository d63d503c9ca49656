"""
Core Models Package

Immutable data models shared by the packer and the bundle layer.

- `Density`, `SlotType`, `SLOT_TABLE`: the closed ICNS slot catalog
- `PixelFormat`, `PixelImage`: decoded rasters
"""

from .slots import Density, SlotSpec, SlotType, SLOT_TABLE, slot_for, slot_from_tag, slot_order
from .image import PixelFormat, PixelImage, UnsupportedPixelFormatError

__all__ = [
    "Density",
    "SlotSpec",
    "SlotType",
    "SLOT_TABLE",
    "slot_for",
    "slot_from_tag",
    "slot_order",
    "PixelFormat",
    "PixelImage",
    "UnsupportedPixelFormatError",
]
