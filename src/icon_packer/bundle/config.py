"""
Module: bundle.config

Purpose:
    Configuration for the external asset catalog compiler path.

Key Classes:
    - CatalogConfig: Tool locations, minimum version and actool flags
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CatalogConfig:
    """
    Configuration for compiling Assets.car with actool (immutable).

    Attributes:
        actool: actool executable name or path
        assetutil: assetutil executable name or path
        min_version: Lowest (major, minor) actool short-bundle-version accepted
        app_icon_name: Name passed to --app-icon
        deployment_target: Value for --minimum-deployment-target
        timeout_s: Seconds before a tool invocation is abandoned

    Example:
        >>> CatalogConfig(actool="/Applications/Xcode.app/.../actool").min_version
        (26, 0)
    """
    actool: str = "actool"
    assetutil: str = "assetutil"
    min_version: Tuple[int, int] = (26, 0)
    app_icon_name: str = "Icon"
    deployment_target: str = "26.0"
    timeout_s: float = 300.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.actool:
            raise ValueError("actool must not be empty")
        if not self.assetutil:
            raise ValueError("assetutil must not be empty")
        if len(self.min_version) != 2 or any(part < 0 for part in self.min_version):
            raise ValueError(f"min_version must be (major, minor): {self.min_version!r}")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive: {self.timeout_s}")
