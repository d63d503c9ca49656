"""
Module: bundle.strategies

Purpose:
    Two ways of turning a project's icon files into bundle artifacts,
    chosen by the shape of the input:

    - FlatImageStrategy: raster images (or a ready .icns) -> <product>.icns
    - CatalogCompilerStrategy: Icon Composer .icon directory (or a ready
      Assets.car) -> Assets.car via actool

Key Classes:
    - IconStrategy: Abstract interface
    - StrategyOutcome: What a strategy produced
    - FlatImageStrategy, CatalogCompilerStrategy

Key Functions:
    - select_strategies(): Pick strategies for a list of icon paths

Dependencies:
    - icon_packer.packer: Decoding and packing
    - bundle.actool: Catalog compilation
    - portalocker (via core.utils.file_locking): Output writes

Used By:
    - bundle.controller
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from icon_packer.core.models import SlotType
from icon_packer.core.utils.file_locking import locked_write_bytes
from icon_packer.packer import (
    IconCandidate,
    IconWriteError,
    PackDiagnostic,
    PackerConfig,
    open_image,
    pack_images,
)

from .actool import ASSETS_CAR_NAME, CatalogCompileError, app_icon_name_from_assets_car, compile_catalog
from .config import CatalogConfig
from .naming import density_for_path, is_assets_car, is_catalog_source, is_icns, is_icon_composer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StrategyOutcome:
    """
    Result of running one strategy (immutable).

    Attributes:
        strategy: Strategy name
        artifact: Produced file, None when the strategy had nothing to do
            or was skipped
        slots: Slots packed into a new .icns (empty for copies/catalogs)
        diagnostics: Per-image soft diagnostics
        warnings: Non-fatal problems, e.g. an outdated actool
        app_icon_name: Icon name inside Assets.car, if found
    """
    strategy: str
    artifact: Optional[Path] = None
    slots: Tuple[SlotType, ...] = ()
    diagnostics: Tuple[PackDiagnostic, ...] = ()
    warnings: Tuple[str, ...] = ()
    app_icon_name: Optional[str] = None


class IconStrategy(ABC):
    """Produces one bundle artifact from a subset of icon paths."""

    name: str = "abstract"

    def __init__(self, icon_paths: Sequence[Path]):
        self.icon_paths = [Path(p) for p in icon_paths]

    @abstractmethod
    def accepts(self, path: Path) -> bool:
        """Whether path is an input for this strategy."""

    @abstractmethod
    def package(self, out_dir: Path) -> StrategyOutcome:
        """
        Produce the artifact in out_dir.

        Returns:
            StrategyOutcome; artifact is None when there was nothing to do
        """

    @property
    def inputs(self) -> List[Path]:
        return [p for p in self.icon_paths if self.accepts(p)]


class FlatImageStrategy(IconStrategy):
    """
    Packs flat raster images into <product_name>.icns.

    An existing .icns among the inputs is copied instead of packing.
    Images are offered to the packer in the given order, so the first
    image for a slot wins.
    """

    name = "flat"

    def __init__(
        self,
        icon_paths: Sequence[Path],
        product_name: str,
        config: Optional[PackerConfig] = None,
    ):
        super().__init__(icon_paths)
        if not product_name:
            raise ValueError("product_name must not be empty")
        self.product_name = product_name
        self.config = config or PackerConfig()

    def accepts(self, path: Path) -> bool:
        return not is_catalog_source(path)

    def package(self, out_dir: Path) -> StrategyOutcome:
        """
        Raises:
            DecodeError: If an input image cannot be decoded
            EmptyFamilyError: If no image fits any slot
            UnsupportedPixelFormatError: If a slot-filling image cannot be encoded
            IconWriteError: If the output cannot be written
        """
        inputs = self.inputs
        if not inputs:
            return StrategyOutcome(self.name)

        for path in inputs:
            if is_icns(path):
                dest = out_dir / path.name
                out_dir.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(path, dest)
                logger.info(f"Using existing icon file {path.name}")
                return StrategyOutcome(self.name, artifact=dest)

        candidates = [
            IconCandidate(open_image(path), density_for_path(path), str(path))
            for path in inputs
        ]
        result = pack_images(candidates, self.config)

        dest = out_dir / f"{self.product_name}.icns"
        try:
            locked_write_bytes(dest, result.data)
        except OSError as e:
            raise IconWriteError(f"Failed to write {dest}: {e}", path=str(dest)) from e

        logger.info(f"Wrote {dest.name} with {len(result.slots)} icon(s)")
        return StrategyOutcome(
            self.name,
            artifact=dest,
            slots=result.slots,
            diagnostics=result.diagnostics,
        )


class CatalogCompilerStrategy(IconStrategy):
    """
    Produces Assets.car from an Icon Composer document.

    An existing .car among the inputs is copied as-is. When several .icon
    documents are given, the last one is compiled.

    Attributes:
        required: When True, compiler failures are raised; otherwise they
            become warnings and the strategy yields no artifact.
    """

    name = "catalog"

    def __init__(
        self,
        icon_paths: Sequence[Path],
        config: Optional[CatalogConfig] = None,
        required: bool = False,
    ):
        super().__init__(icon_paths)
        self.config = config or CatalogConfig()
        self.required = required

    def accepts(self, path: Path) -> bool:
        return is_catalog_source(path)

    def package(self, out_dir: Path) -> StrategyOutcome:
        """
        Raises:
            CatalogCompileError: Only when required
        """
        inputs = self.inputs
        dest = out_dir / ASSETS_CAR_NAME

        for path in inputs:
            if is_assets_car(path):
                out_dir.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(path, dest)
                logger.info(f"Using existing asset catalog {path.name}")
                return StrategyOutcome(self.name, artifact=dest)

        documents = [p for p in inputs if is_icon_composer(p)]
        if not documents:
            return StrategyOutcome(self.name)

        try:
            assets_car = compile_catalog(documents[-1], out_dir, self.config)
        except CatalogCompileError as e:
            if self.required:
                raise
            logger.warning(f"Skipping {ASSETS_CAR_NAME} creation ({e.reason}): {e}")
            return StrategyOutcome(self.name, warnings=(str(e),))

        return StrategyOutcome(
            self.name,
            artifact=assets_car,
            app_icon_name=app_icon_name_from_assets_car(assets_car, self.config),
        )


def select_strategies(
    icon_paths: Sequence[Path],
    product_name: str,
    packer_config: Optional[PackerConfig] = None,
    catalog_config: Optional[CatalogConfig] = None,
    require_catalog: Optional[bool] = None,
) -> List[IconStrategy]:
    """
    Choose strategies from the shape of the inputs.

    The catalog path is required when it is the only path available,
    unless require_catalog says otherwise.

    Example:
        >>> [s.name for s in select_strategies([Path("a.png"), Path("App.icon")], "App")]
        ['flat', 'catalog']
    """
    paths = [Path(p) for p in icon_paths]
    has_catalog = any(is_catalog_source(p) for p in paths)
    has_flat = any(not is_catalog_source(p) for p in paths)

    strategies: List[IconStrategy] = []
    if has_flat:
        strategies.append(FlatImageStrategy(paths, product_name, packer_config))
    if has_catalog:
        required = (not has_flat) if require_catalog is None else require_catalog
        strategies.append(CatalogCompilerStrategy(paths, catalog_config, required=required))
    return strategies
