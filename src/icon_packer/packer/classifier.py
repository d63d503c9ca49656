"""
Module: packer.classifier

Purpose:
    Decide which icon slot an image can fill. An image either fits a slot
    as-is, fits one after being shrunk to the next power of two below its
    side length, or fits none at all.

Key Functions:
    - classify(): Classify a (side length, density) pair
    - classify_image(): Classify a decoded image
    - floor_power_of_two(): Largest power of two <= n

Key Classes:
    - Verdict: DIRECT / NEEDS_RESIZE / UNUSABLE
    - Classification: Verdict plus slot and target size

Used By:
    - packer.builder
    - packer.controller
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from icon_packer.core.models import Density, PixelImage, SlotType, slot_for


class Verdict(str, Enum):
    """Outcome of classifying one image."""
    DIRECT = "direct"              # Side length is a slot size
    NEEDS_RESIZE = "needs_resize"  # Shrink to target_size first
    UNUSABLE = "unusable"          # No slot at either size

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Classification:
    """
    Classification result (immutable).

    Attributes:
        verdict: What the caller should do with the image
        side: Square side length that was classified
        density: Density it was classified at
        slot: Target slot (None when UNUSABLE)
        target_size: Pixel size to resample to (slot size, or None when UNUSABLE)
        reason: Explanation for UNUSABLE verdicts
    """
    verdict: Verdict
    side: int
    density: Density
    slot: Optional[SlotType] = None
    target_size: Optional[int] = None
    reason: str = ""

    @property
    def is_usable(self) -> bool:
        return self.verdict is not Verdict.UNUSABLE

    @property
    def needs_resize(self) -> bool:
        return self.verdict is Verdict.NEEDS_RESIZE


def floor_power_of_two(n: int) -> int:
    """
    Round n down to a power of two, i.e. 2 ** floor(log2(n)).

    Integer arithmetic, so exact for any positive n.

    Example:
        >>> floor_power_of_two(1000)
        512
        >>> floor_power_of_two(512)
        512
    """
    if n <= 0:
        raise ValueError(f"n must be positive: {n}")
    return 1 << (n.bit_length() - 1)


def classify(side: int, density: Density | int) -> Classification:
    """
    Classify a square side length at a density.

    Never rounds up: images are only ever shrunk.

    Args:
        side: Square side length in pixels (shorter edge of the image)
        density: Density inferred for the source asset

    Returns:
        Classification with verdict DIRECT, NEEDS_RESIZE or UNUSABLE

    Raises:
        ValueError: If side is not positive or density is not 1 or 2

    Example:
        >>> classify(600, Density.STANDARD).target_size
        512
        >>> classify(17, Density.RETINA).verdict
        <Verdict.UNUSABLE: 'unusable'>
    """
    if side <= 0:
        raise ValueError(f"side must be positive: {side}")
    density = Density(density)

    slot = slot_for(side, density)
    if slot is not None:
        return Classification(Verdict.DIRECT, side, density, slot=slot, target_size=side)

    rounded = floor_power_of_two(side)
    if rounded != side:
        slot = slot_for(rounded, density)
        if slot is not None:
            return Classification(
                Verdict.NEEDS_RESIZE, side, density, slot=slot, target_size=rounded
            )
        reason = f"no {density} slot for {side}px or {rounded}px"
    else:
        reason = f"no {density} slot for {side}px"
    return Classification(Verdict.UNUSABLE, side, density, reason=reason)


def classify_image(image: PixelImage, density: Density | int) -> Classification:
    """Classify an image by its shorter edge."""
    return classify(image.side, density)
