"""
Module: bundle.controller

Purpose:
    Produce the icon artifacts of an application bundle from the icon
    paths listed in a project configuration.
    Select strategies → Run each → Collect artifacts and warnings

Key Functions:
    - bundle_icons(): Main entry point, runs every applicable strategy
    - create_icns_file(): Flat image path only
    - create_assets_car_file(): Catalog compiler path only

Key Classes:
    - BundleResult: Artifacts, diagnostics and warnings
    - BundleError: Exception for bundle failures

Used By:
    - cli: `bundle` command
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from icon_packer.core.models import UnsupportedPixelFormatError
from icon_packer.packer import DecodeError, EmptyFamilyError, PackDiagnostic, PackError, PackerConfig

from .actool import CatalogCompileError
from .config import CatalogConfig
from .strategies import (
    CatalogCompilerStrategy,
    FlatImageStrategy,
    IconStrategy,
    StrategyOutcome,
    select_strategies,
)

logger = logging.getLogger(__name__)


class BundleError(Exception):
    """Error while producing bundle icon artifacts."""
    pass


@dataclass(frozen=True)
class BundleResult:
    """
    Complete bundle result (immutable).

    Attributes:
        icns_path: Written or copied .icns, if any
        assets_car_path: Compiled or copied Assets.car, if any
        app_icon_name: Icon name inside Assets.car, if found
        diagnostics: Images skipped while packing
        warnings: Non-fatal problems from optional paths

    Example:
        >>> result = bundle_icons(Path("out"), icons, "MyApp")
        >>> result.icns_path
        PosixPath('out/MyApp.icns')
    """
    icns_path: Optional[Path] = None
    assets_car_path: Optional[Path] = None
    app_icon_name: Optional[str] = None
    diagnostics: Tuple[PackDiagnostic, ...] = ()
    warnings: Tuple[str, ...] = ()


def _run(strategy: IconStrategy, out_dir: Path) -> StrategyOutcome:
    try:
        return strategy.package(out_dir)
    except EmptyFamilyError as e:
        raise BundleError(f"No usable Icon files found: {e}") from e
    except (DecodeError, UnsupportedPixelFormatError, PackError) as e:
        raise BundleError(f"Failed to create icon file: {e}") from e
    except CatalogCompileError as e:
        raise BundleError(f"Failed to create asset catalog: {e}") from e
    except OSError as e:
        raise BundleError(f"Failed to read or copy icon file: {e}") from e


def create_icns_file(
    out_dir: Path,
    icon_paths: Sequence[Path],
    product_name: str,
    config: Optional[PackerConfig] = None,
) -> Optional[Path]:
    """
    Produce <product_name>.icns in out_dir from flat icon files.

    Args:
        out_dir: Destination directory
        icon_paths: Icon files in priority order; .car/.icon are ignored
        product_name: Output file stem
        config: Packing configuration

    Returns:
        Path of the .icns, or None if there were no flat icon files

    Raises:
        BundleError: If packing or writing fails
    """
    outcome = _run(FlatImageStrategy(icon_paths, product_name, config), out_dir)
    return outcome.artifact


def create_assets_car_file(
    out_dir: Path,
    icon_paths: Sequence[Path],
    config: Optional[CatalogConfig] = None,
    required: bool = False,
) -> Optional[Path]:
    """
    Produce Assets.car in out_dir from an Icon Composer document.

    Returns:
        Path of Assets.car, or None if there was no catalog input or the
        optional compiler path was skipped

    Raises:
        BundleError: If required and the compiler path fails
    """
    outcome = _run(CatalogCompilerStrategy(icon_paths, config, required=required), out_dir)
    return outcome.artifact


def bundle_icons(
    out_dir: Path,
    icon_paths: Sequence[Path],
    product_name: str,
    packer_config: Optional[PackerConfig] = None,
    catalog_config: Optional[CatalogConfig] = None,
    require_catalog: Optional[bool] = None,
) -> BundleResult:
    """
    Run every strategy that applies to icon_paths.

    Args:
        out_dir: Destination directory
        icon_paths: Icon files and .icon documents
        product_name: Stem for the generated .icns
        require_catalog: Force the catalog path to be required (True) or
            optional (False). Default: required only without flat images.

    Raises:
        BundleError: On any hard failure
    """
    strategies = select_strategies(
        icon_paths, product_name, packer_config, catalog_config, require_catalog
    )
    if not strategies:
        logger.info("No icon files configured")
        return BundleResult()

    icns_path = assets_car_path = app_icon_name = None
    diagnostics: list[PackDiagnostic] = []
    warnings: list[str] = []

    for strategy in strategies:
        outcome = _run(strategy, out_dir)
        diagnostics.extend(outcome.diagnostics)
        warnings.extend(outcome.warnings)
        if outcome.strategy == FlatImageStrategy.name:
            icns_path = outcome.artifact
        else:
            assets_car_path = outcome.artifact
            app_icon_name = outcome.app_icon_name

    if diagnostics:
        logger.info(f"{len(diagnostics)} icon file(s) skipped")

    return BundleResult(
        icns_path=icns_path,
        assets_car_path=assets_car_path,
        app_icon_name=app_icon_name,
        diagnostics=tuple(diagnostics),
        warnings=tuple(warnings),
    )
