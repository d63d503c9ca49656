"""
Module: packer.controller

Purpose:
    Run a complete packing pass over a sequence of images.
    Classify → (optionally reorder) → Insert → Serialize

Key Functions:
    - pack_images(): Main entry point for packing decoded images

Key Classes:
    - IconCandidate: One input image with its density and name
    - PackResult: Container bytes plus diagnostics

Used By:
    - bundle.controller: create_icns_file()
    - cli: `pack` command
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from icon_packer.core.models import Density, PixelImage, SlotType

from .builder import IconFamilyBuilder
from .classifier import classify_image
from .config import PackerConfig
from .diagnostics import DiagnosticsReport, PackDiagnostic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IconCandidate:
    """
    One image offered to the packer.

    Attributes:
        image: Decoded pixels
        density: Density inferred from the asset name
        source: Name used in diagnostics (usually the file path)
    """
    image: PixelImage
    density: Density
    source: str = ""


@dataclass(frozen=True)
class PackResult:
    """
    Result of a packing pass (immutable).

    Attributes:
        data: Serialized container bytes
        slots: Populated slots in record order
        diagnostics: Images that were skipped, in processing order
    """
    data: bytes
    slots: Tuple[SlotType, ...]
    diagnostics: Tuple[PackDiagnostic, ...]

    def report(self) -> DiagnosticsReport:
        return DiagnosticsReport.from_diagnostics(list(self.diagnostics))


def _insertion_order(candidates: List[IconCandidate], config: PackerConfig) -> List[IconCandidate]:
    """
    Order candidates for insertion.

    With defer_resized, images that already match a slot (or cannot be
    used at all) keep their place and images that need shrinking move
    to the end, each group in caller order.
    """
    if not config.defer_resized:
        return candidates

    ready: List[IconCandidate] = []
    deferred: List[IconCandidate] = []
    for candidate in candidates:
        classification = classify_image(candidate.image, candidate.density)
        if classification.needs_resize or (
            classification.is_usable and not candidate.image.is_square
        ):
            deferred.append(candidate)
        else:
            ready.append(candidate)
    if deferred:
        logger.debug(f"Deferring {len(deferred)} image(s) that need resampling")
    return ready + deferred


def pack_images(
    candidates: Iterable[IconCandidate],
    config: Optional[PackerConfig] = None,
) -> PackResult:
    """
    Pack images into a serialized icon container.

    Args:
        candidates: Images in priority order; the first image for a slot wins
        config: Packing configuration

    Returns:
        PackResult with container bytes and soft diagnostics

    Raises:
        EmptyFamilyError: If no image filled a slot
        UnsupportedPixelFormatError: If a slot-filling image has an
            unsupported pixel format

    Example:
        >>> result = pack_images([IconCandidate(img, Density.RETINA, "icon@2x.png")])
        >>> result.slots
        (<SlotType.IC14: 'ic14'>,)
    """
    config = config or PackerConfig()
    start_time = time.perf_counter()

    ordered = _insertion_order(list(candidates), config)
    logger.info(f"Packing {len(ordered)} image(s)")

    builder = IconFamilyBuilder(config)
    for candidate in ordered:
        builder.insert(candidate.image, candidate.density, source=candidate.source or None)

    data = builder.serialize()

    elapsed = time.perf_counter() - start_time
    logger.debug(f"Packing pass finished in {elapsed:.3f}s")

    return PackResult(
        data=data,
        slots=builder.family.slots(),
        diagnostics=tuple(builder.diagnostics),
    )
