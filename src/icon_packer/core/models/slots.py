"""
Module: slots

Purpose:
    Defines the closed catalog of ICNS icon slots. Each slot is one
    (pixel size, density) requirement of the container format and is
    identified by its four-character OSType tag.

Key Classes:
    - Density: Display scale factor (1x standard, 2x retina)
    - SlotType: Enumeration of supported ICNS element types
    - SlotSpec: Static table row for a slot

Key Functions:
    - slot_for(pixel_size, density): Look up the slot for a square size

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - packer.classifier: Slot lookup during classification
    - packer.codec: Record tags and serialization order
    - bundle.naming: Density inference

Only PNG-capable element types are listed. Legacy RLE types (is32, il32,
ih32, it32) need companion mask records and are not produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional, Tuple


class Density(IntEnum):
    """Display scale factor associated with an image asset."""
    STANDARD = 1
    RETINA = 2

    def __str__(self) -> str:
        return f"@{self.value}x"

    # IntEnum formats as a plain int otherwise
    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


class SlotType(str, Enum):
    """
    ICNS element type occupying one slot of an icon family.

    The value is the OSType tag written into the container. Geometry
    lives in SLOT_TABLE; use the properties below to read it.

    Example:
        >>> SlotType.IC09.pixel_size
        512
        >>> SlotType.IC10.density
        <Density.RETINA: 2>
    """
    ICP4 = "icp4"
    ICP5 = "icp5"
    ICP6 = "icp6"
    IC07 = "ic07"
    IC08 = "ic08"
    IC09 = "ic09"
    IC11 = "ic11"
    IC12 = "ic12"
    IC13 = "ic13"
    IC14 = "ic14"
    IC10 = "ic10"

    def __str__(self) -> str:
        return self.value

    @property
    def tag(self) -> bytes:
        """OSType tag as the 4 ASCII bytes written to the container."""
        return self.value.encode("ascii")

    @property
    def spec(self) -> "SlotSpec":
        return _BY_SLOT[self]

    @property
    def pixel_size(self) -> int:
        """Side length in pixels of the image stored in this slot."""
        return _BY_SLOT[self].pixel_size

    @property
    def density(self) -> Density:
        return _BY_SLOT[self].density

    @property
    def point_size(self) -> int:
        return _BY_SLOT[self].point_size

    @property
    def label(self) -> str:
        """Human readable name like '128pt@2x'."""
        return f"{self.point_size}pt{self.density}"


@dataclass(frozen=True, slots=True)
class SlotSpec:
    """
    One row of the slot table.

    Attributes:
        slot: The element type
        pixel_size: Square side length in pixels
        density: Scale factor the slot is meant for

    Invariants:
        - pixel_size is a power of two
        - pixel_size is divisible by density
    """
    slot: SlotType
    pixel_size: int
    density: Density

    def __post_init__(self) -> None:
        if self.pixel_size <= 0 or self.pixel_size & (self.pixel_size - 1):
            raise ValueError(f"pixel_size must be a power of two: {self.pixel_size}")
        if self.pixel_size % self.density:
            raise ValueError(
                f"pixel_size {self.pixel_size} not divisible by density {int(self.density)}"
            )

    @property
    def point_size(self) -> int:
        return self.pixel_size // self.density


# Order of this table is the record order inside serialized containers.
SLOT_TABLE: Tuple[SlotSpec, ...] = (
    SlotSpec(SlotType.ICP4, 16, Density.STANDARD),
    SlotSpec(SlotType.ICP5, 32, Density.STANDARD),
    SlotSpec(SlotType.ICP6, 64, Density.STANDARD),
    SlotSpec(SlotType.IC07, 128, Density.STANDARD),
    SlotSpec(SlotType.IC08, 256, Density.STANDARD),
    SlotSpec(SlotType.IC09, 512, Density.STANDARD),
    SlotSpec(SlotType.IC11, 32, Density.RETINA),
    SlotSpec(SlotType.IC12, 64, Density.RETINA),
    SlotSpec(SlotType.IC13, 256, Density.RETINA),
    SlotSpec(SlotType.IC14, 512, Density.RETINA),
    SlotSpec(SlotType.IC10, 1024, Density.RETINA),
)

_BY_SLOT: Dict[SlotType, SlotSpec] = {spec.slot: spec for spec in SLOT_TABLE}
_BY_SIZE_AND_DENSITY: Dict[Tuple[int, Density], SlotType] = {
    (spec.pixel_size, spec.density): spec.slot for spec in SLOT_TABLE
}
_ORDER: Dict[SlotType, int] = {spec.slot: index for index, spec in enumerate(SLOT_TABLE)}


def slot_for(pixel_size: int, density: Density | int) -> Optional[SlotType]:
    """
    Find the slot holding square images of pixel_size at density.

    Returns None when the container format has no such slot.

    Example:
        >>> slot_for(512, Density.RETINA)
        <SlotType.IC14: 'ic14'>
        >>> slot_for(16, Density.RETINA) is None
        True
    """
    try:
        density = Density(density)
    except ValueError:
        return None
    return _BY_SIZE_AND_DENSITY.get((pixel_size, density))


def slot_order(slot: SlotType) -> int:
    """Position of slot in the serialization order."""
    return _ORDER[slot]


def slot_from_tag(tag: bytes | str) -> Optional[SlotType]:
    """Map an OSType tag back to its slot, None for tags we do not produce."""
    if isinstance(tag, bytes):
        try:
            tag = tag.decode("ascii")
        except UnicodeDecodeError:
            return None
    try:
        return SlotType(tag)
    except ValueError:
        return None
