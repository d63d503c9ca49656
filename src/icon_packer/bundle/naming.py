"""
Module: bundle.naming

File naming conventions for icon sources: density from the "@2x"
suffix and grouping by file type.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from icon_packer.core.models import Density

RETINA_SUFFIX = "@2x"

ICNS_SUFFIX = ".icns"
ASSETS_CAR_SUFFIX = ".car"
ICON_COMPOSER_SUFFIX = ".icon"


def is_retina(path: Union[str, Path]) -> bool:
    """
    True when the file stem ends with "@2x".

    Example:
        >>> is_retina("icons/128x128@2x.png")
        True
        >>> is_retina("icons/128x128.png")
        False
    """
    return Path(path).stem.endswith(RETINA_SUFFIX)


def density_for_path(path: Union[str, Path]) -> Density:
    return Density.RETINA if is_retina(path) else Density.STANDARD


def is_icns(path: Path) -> bool:
    return path.suffix.lower() == ICNS_SUFFIX


def is_assets_car(path: Path) -> bool:
    return path.suffix.lower() == ASSETS_CAR_SUFFIX


def is_icon_composer(path: Path) -> bool:
    """Icon Composer documents are directories named *.icon."""
    return path.suffix.lower() == ICON_COMPOSER_SUFFIX


def is_catalog_source(path: Path) -> bool:
    """Inputs handled by the catalog compiler rather than the packer."""
    return is_assets_car(path) or is_icon_composer(path)
