"""
Module: packer.codec

Purpose:
    Binary layout of the ICNS container and PNG payload encoding.

    Layout (all integers big-endian uint32):
        b"icns" | total file length
        then per record: OSType tag | 8 + payload length | payload

    Record lengths include their own 8-byte header, as does the file
    length.

Key Functions:
    - encode_payload(): PNG-encode a square image
    - serialize_family(): IconFamily -> container bytes
    - read_icns(): container bytes -> records

Dependencies:
    - PIL: PNG encoding
    - struct (std)

Used By:
    - packer.builder
    - cli (inspect)
"""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from typing import List, Optional

from icon_packer.core.models import PixelImage, SlotType, slot_from_tag

from .family import EmptyFamilyError, IconFamily

ICNS_MAGIC = b"icns"
HEADER_SIZE = 8
_HEADER = struct.Struct(">4sI")


class IcnsFormatError(ValueError):
    """Bytes are not a well-formed ICNS container."""
    pass


@dataclass(frozen=True)
class IcnsRecord:
    """One element of a parsed container."""
    tag: bytes
    payload: bytes

    @property
    def slot(self) -> Optional[SlotType]:
        """Slot for the tag, None for element types this package does not write."""
        return slot_from_tag(self.tag)

    @property
    def length(self) -> int:
        """Record length as stored in the container (header included)."""
        return HEADER_SIZE + len(self.payload)


def encode_payload(image: PixelImage) -> bytes:
    """
    Encode an image as PNG.

    Raises:
        UnsupportedPixelFormatError: If the image mode is not packable
    """
    buffer = io.BytesIO()
    image.to_pil().save(buffer, format="PNG")
    return buffer.getvalue()


def encode_record(slot: SlotType, payload: bytes) -> bytes:
    return _HEADER.pack(slot.tag, HEADER_SIZE + len(payload)) + payload


def serialize_family(family: IconFamily) -> bytes:
    """
    Serialize a family into container bytes.

    Records are written in slot table order.

    Raises:
        EmptyFamilyError: If no slot is populated
    """
    if family.is_empty():
        raise EmptyFamilyError()

    body = b"".join(encode_record(slot, payload) for slot, payload in family.items())
    return _HEADER.pack(ICNS_MAGIC, HEADER_SIZE + len(body)) + body


def read_icns(data: bytes) -> List[IcnsRecord]:
    """
    Parse container bytes into records, in file order.

    Raises:
        IcnsFormatError: Bad magic, truncated header, or a length field
            that disagrees with the buffer
    """
    if len(data) < HEADER_SIZE:
        raise IcnsFormatError(f"container too short: {len(data)} bytes")
    magic, total = _HEADER.unpack_from(data, 0)
    if magic != ICNS_MAGIC:
        raise IcnsFormatError(f"bad magic {magic!r}, expected {ICNS_MAGIC!r}")
    if total != len(data):
        raise IcnsFormatError(f"header length {total} does not match buffer length {len(data)}")

    records: List[IcnsRecord] = []
    offset = HEADER_SIZE
    while offset < total:
        if total - offset < HEADER_SIZE:
            raise IcnsFormatError(f"truncated record header at offset {offset}")
        tag, length = _HEADER.unpack_from(data, offset)
        if length < HEADER_SIZE or offset + length > total:
            raise IcnsFormatError(f"record {tag!r} at offset {offset} has invalid length {length}")
        records.append(IcnsRecord(tag, bytes(data[offset + HEADER_SIZE:offset + length])))
        offset += length
    return records
