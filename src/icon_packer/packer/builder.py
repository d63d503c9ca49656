"""
Module: packer.builder

Purpose:
    Accumulate classified images into an IconFamily and serialize it.
    Classify → dedup → check format → resample → encode → insert.

Key Classes:
    - IconFamilyBuilder: Stateful builder for one packing pass
    - BuilderState: EMPTY → POPULATING → FINALIZED

Dependencies:
    - packer.classifier: Slot selection
    - packer.resample: Lanczos downsampling
    - packer.codec: PNG payloads and container layout

Used By:
    - packer.controller: pack_images()

Dedup policy:
    The first image inserted for a slot keeps it. Later images for the
    same slot are skipped with a DUPLICATE_SLOT diagnostic, so the order
    in which the caller presents images decides the output.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, Optional

from icon_packer.core.models import Density, PixelImage

from .classifier import classify_image
from .codec import encode_payload, serialize_family
from .config import PackerConfig
from .diagnostics import PackDiagnostic, duplicate_slot, unusable
from .family import EmptyFamilyError, FamilyFinalizedError, IconFamily
from .resample import resample_square

logger = logging.getLogger(__name__)


class BuilderState(Enum):
    EMPTY = auto()       # No slot filled yet
    POPULATING = auto()  # At least one slot filled
    FINALIZED = auto()   # serialize() succeeded; no further changes


class IconFamilyBuilder:
    """
    Builds one icon family from a sequence of images.

    A builder is single use: once serialize() succeeds it is finalized
    and rejects further inserts. Independent builders share no state.

    Attributes:
        config: Packing configuration
        diagnostics: Soft issues recorded so far, in insertion order

    Example:
        >>> builder = IconFamilyBuilder()
        >>> builder.insert(image_512, Density.RETINA, source="icon@2x.png")
        >>> data = builder.serialize()
        >>> data[:4]
        b'icns'
    """

    def __init__(self, config: Optional[PackerConfig] = None):
        self.config = config or PackerConfig()
        self.diagnostics: List[PackDiagnostic] = []
        self._family = IconFamily()
        self._state = BuilderState.EMPTY
        self._inserted = 0

    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def family(self) -> IconFamily:
        return self._family

    def insert(
        self,
        image: PixelImage,
        density: Density | int,
        source: Optional[str] = None,
    ) -> Optional[PackDiagnostic]:
        """
        Try to place an image into the family.

        Args:
            image: Decoded image
            density: Density inferred for the source asset
            source: Name used in diagnostics and errors; defaults to "image #N"

        Returns:
            None if the image filled a slot, otherwise the diagnostic
            explaining why it was skipped (also appended to diagnostics).

        Raises:
            FamilyFinalizedError: If serialize() already succeeded
            UnsupportedPixelFormatError: If the image would fill a free slot
                but its pixel format cannot be encoded
        """
        if self._state is BuilderState.FINALIZED:
            raise FamilyFinalizedError("Cannot insert into a finalized icon family")

        density = Density(density)
        self._inserted += 1
        name = source or f"image #{self._inserted}"

        classification = classify_image(image, density)
        if not classification.is_usable:
            diagnostic = unusable(name, image.width, image.height, density, classification.reason)
            return self._skip(diagnostic)

        slot = classification.slot
        if self._family.has_slot(slot):
            diagnostic = duplicate_slot(
                name, image.width, image.height, density, slot, self._family.source_of(slot)
            )
            return self._skip(diagnostic)

        image.require_format(source=name, slot=slot.value)

        square = resample_square(image, classification.target_size, resample=self.config.resample)
        self._family.add_if_absent(slot, encode_payload(square), source=name)
        self._state = BuilderState.POPULATING

        logger.debug(
            f"Filled {slot} ({slot.label}) from {name} "
            f"[{image.width}x{image.height} -> {square.width}x{square.height}]"
        )
        return None

    def serialize(self) -> bytes:
        """
        Serialize the family and finalize the builder.

        Raises:
            EmptyFamilyError: If no slot was filled
            FamilyFinalizedError: If already serialized
        """
        if self._state is BuilderState.FINALIZED:
            raise FamilyFinalizedError("Icon family was already serialized")
        if self._state is BuilderState.EMPTY:
            raise EmptyFamilyError(
                f"No usable icon images among {self._inserted} candidate(s): "
                f"{len(self.diagnostics)} skipped",
                diagnostics=tuple(self.diagnostics),
            )

        data = serialize_family(self._family)
        self._state = BuilderState.FINALIZED
        logger.info(
            f"Packed {len(self._family)} slot(s) into {len(data)} bytes: "
            f"{', '.join(s.value for s in self._family.slots())}"
        )
        return data

    def _skip(self, diagnostic: PackDiagnostic) -> PackDiagnostic:
        self.diagnostics.append(diagnostic)
        logger.warning(diagnostic.message)
        return diagnostic
