"""
Module: bundle

Purpose:
    Glue between a project's icon file list and the packer: density from
    file names, reuse of ready-made artifacts, output writing, and the
    optional actool path for Icon Composer documents.

Key Functions:
    - bundle_icons(): Run all applicable strategies
    - create_icns_file(): Flat images -> .icns
    - create_assets_car_file(): .icon document -> Assets.car
    - is_retina(), density_for_path(): Naming convention

Key Classes:
    - BundleResult, BundleError
    - CatalogConfig, CatalogCompileError
    - IconStrategy, FlatImageStrategy, CatalogCompilerStrategy
"""

from .config import CatalogConfig
from .naming import density_for_path, is_retina
from .actool import (
    CatalogCompileError,
    app_icon_name_from_assets_car,
    compile_catalog,
    get_actool_version,
    parse_actool_version,
)
from .strategies import (
    CatalogCompilerStrategy,
    FlatImageStrategy,
    IconStrategy,
    StrategyOutcome,
    select_strategies,
)
from .controller import BundleError, BundleResult, bundle_icons, create_assets_car_file, create_icns_file

__all__ = [
    "CatalogConfig",
    "density_for_path",
    "is_retina",
    "CatalogCompileError",
    "app_icon_name_from_assets_car",
    "compile_catalog",
    "get_actool_version",
    "parse_actool_version",
    "IconStrategy",
    "FlatImageStrategy",
    "CatalogCompilerStrategy",
    "StrategyOutcome",
    "select_strategies",
    "BundleError",
    "BundleResult",
    "bundle_icons",
    "create_assets_car_file",
    "create_icns_file",
]
