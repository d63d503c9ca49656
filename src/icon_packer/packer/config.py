"""
Module: packer.config

Purpose:
    Configuration dataclass for a packing pass. Immutable settings for
    resampling and insertion order.

Key Classes:
    - PackerConfig: Main configuration for packing

Dependencies:
    - dataclasses (std)
    - PIL.Image: Resampling filter constants

Used By:
    - packer.builder: Resampling filter
    - packer.controller: Insertion ordering
    - bundle.controller, cli
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

# Area-averaging and Lanczos-class kernels only; nearest/bilinear would alias
RESAMPLE_FILTERS = {
    "lanczos": Image.Resampling.LANCZOS,
    "box": Image.Resampling.BOX,
    "bicubic": Image.Resampling.BICUBIC,
    "hamming": Image.Resampling.HAMMING,
}


@dataclass(frozen=True)
class PackerConfig:
    """
    Configuration for packing images into an icon family (immutable).

    Attributes:
        resample_filter: Name of the downsampling filter (see RESAMPLE_FILTERS)
        defer_resized: Insert images that already fit a slot before any image
            that needs resampling. Caller order is kept within each group.
            When False, caller order alone decides which image wins a slot.

    Example:
        >>> config = PackerConfig(defer_resized=True)
        >>> config.resample
        <Resampling.LANCZOS: 1>
    """
    resample_filter: str = "lanczos"
    defer_resized: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.resample_filter not in RESAMPLE_FILTERS:
            raise ValueError(
                f"resample_filter must be one of {sorted(RESAMPLE_FILTERS)}: "
                f"{self.resample_filter!r}"
            )

    @property
    def resample(self) -> Image.Resampling:
        return RESAMPLE_FILTERS[self.resample_filter]
