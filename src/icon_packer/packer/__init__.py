"""
Module: packer

Purpose:
    Icon family packer: maps decoded images of arbitrary size onto the
    fixed ICNS slot catalog, shrinks oversized images, keeps the first
    image offered for each slot and serializes the result.

Key Functions:
    - classify(): Slot decision for a side length and density
    - pack_images(): Pack a sequence of images into container bytes
    - decode_image() / open_image(): Pillow-backed decoding
    - read_icns(): Parse a container

Key Classes:
    - PackerConfig: Packing configuration
    - IconFamilyBuilder: Incremental builder with dedup
    - PackResult: Container bytes plus diagnostics

Dependencies:
    - PIL: Decoding, resampling, PNG encoding
    - icon_packer.core.models: Slots and pixel images
"""

from .config import PackerConfig
from .classifier import Classification, Verdict, classify, classify_image, floor_power_of_two
from .family import (
    EmptyFamilyError,
    FamilyFinalizedError,
    IconFamily,
    IconWriteError,
    PackError,
)
from .codec import IcnsFormatError, IcnsRecord, read_icns, serialize_family
from .decoder import DecodeError, decode_image, open_image
from .diagnostics import DiagnosticKind, DiagnosticsReport, PackDiagnostic
from .builder import BuilderState, IconFamilyBuilder
from .controller import IconCandidate, PackResult, pack_images

__all__ = [
    # Config
    "PackerConfig",
    # Classification
    "Classification",
    "Verdict",
    "classify",
    "classify_image",
    "floor_power_of_two",
    # Family
    "IconFamily",
    "IconFamilyBuilder",
    "BuilderState",
    # Codec
    "IcnsRecord",
    "read_icns",
    "serialize_family",
    # Decoding
    "decode_image",
    "open_image",
    # Diagnostics
    "DiagnosticKind",
    "DiagnosticsReport",
    "PackDiagnostic",
    # Controller
    "IconCandidate",
    "PackResult",
    "pack_images",
    # Errors
    "PackError",
    "EmptyFamilyError",
    "FamilyFinalizedError",
    "IconWriteError",
    "IcnsFormatError",
    "DecodeError",
]
