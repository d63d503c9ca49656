"""
Module: bundle.actool

Purpose:
    Wrapper around Apple's asset catalog tools. Compiles an Icon Composer
    document (a ``*.icon`` directory) into ``Assets.car`` with ``actool``
    and reads the app icon name back with ``assetutil``.

Key Functions:
    - parse_actool_version(): Extract short-bundle-version from tool output
    - parse_version_tuple(): "26.1" -> (26, 1)
    - get_actool_version(): Ask the installed actool for its version
    - check_actool(): Verify actool is present and new enough
    - compile_catalog(): Build Assets.car from a .icon directory
    - app_icon_name_from_assets_car(): Name of the "Icon Image" asset

Key Classes:
    - CatalogCompileError: Any failure of this path, with a reason code

Dependencies:
    - subprocess (std): Tool invocation
    - json (std): assetutil output

Used By:
    - bundle.controller: create_assets_car_file()
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import CatalogConfig

logger = logging.getLogger(__name__)

VERSION_PREFIX = "short-bundle-version:"
ASSETS_CAR_NAME = "Assets.car"
PARTIAL_INFO_PLIST = "assetcatalog_generated_info.plist"
ICON_IMAGE_ASSET_TYPE = "Icon Image"


class CatalogCompileError(Exception):
    """
    The catalog compiler path failed.

    Attributes:
        reason: One of MISSING, UNVERSIONED, TOO_OLD, FAILED,
            NO_ARTIFACT, NOT_DIRECTORY
        stderr: Tool error output, if a tool ran
    """
    MISSING = "missing"
    UNVERSIONED = "unversioned"
    TOO_OLD = "too_old"
    FAILED = "failed"
    NO_ARTIFACT = "no_artifact"
    NOT_DIRECTORY = "not_directory"

    def __init__(self, message: str, reason: str, stderr: str = ""):
        super().__init__(message)
        self.reason = reason
        self.stderr = stderr


def run_tool(args: Sequence[str], timeout: float) -> subprocess.CompletedProcess:
    """
    Run a tool and require a zero exit status.

    Raises:
        CatalogCompileError: MISSING if the executable is not found,
            FAILED on a non-zero exit or timeout
    """
    tool = args[0]
    try:
        proc = subprocess.run(list(args), capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise CatalogCompileError(f"{tool} not found", CatalogCompileError.MISSING) from e
    except subprocess.TimeoutExpired as e:
        raise CatalogCompileError(
            f"{tool} timed out after {timeout:.0f}s", CatalogCompileError.FAILED
        ) from e

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        raise CatalogCompileError(
            f"{tool} exited with status {proc.returncode}: {stderr or '(no output)'}",
            CatalogCompileError.FAILED,
            stderr=stderr,
        )
    return proc


# ─────────────────────────────────────────────────────────────────────────────
# Version checks
# ─────────────────────────────────────────────────────────────────────────────

def parse_actool_version(output: str) -> Optional[str]:
    """
    Extract the short bundle version from ``actool --version`` output.

    The output looks like::

        /* com.apple.actool.version */
        bundle-version: 24411
        short-bundle-version: 26.1

    Returns:
        "26.1", or None when the line is absent
    """
    for line in output.splitlines():
        line = line.strip()
        if line.startswith(VERSION_PREFIX):
            return line[len(VERSION_PREFIX):].strip()
    return None


def parse_version_tuple(version: str) -> Optional[Tuple[int, int]]:
    """
    Parse "major.minor" into integers. A missing minor counts as 0.

    Example:
        >>> parse_version_tuple("26.1")
        (26, 1)
        >>> parse_version_tuple("26")
        (26, 0)
        >>> parse_version_tuple("beta") is None
        True
    """
    parts = version.strip().split(".")
    try:
        major = int(parts[0])
        minor = int(parts[1]) if len(parts) > 1 and parts[1] else 0
    except ValueError:
        return None
    return major, minor


def _run_version(config: CatalogConfig) -> subprocess.CompletedProcess:
    return run_tool(
        [config.actool, "--version", "--output-format=human-readable-text"],
        timeout=config.timeout_s,
    )


def get_actool_version(config: Optional[CatalogConfig] = None) -> Optional[str]:
    """
    Run ``actool --version --output-format=human-readable-text``.

    Returns:
        The short bundle version, or None if actool is missing, fails,
        or prints no version line.
    """
    config = config or CatalogConfig()
    try:
        proc = _run_version(config)
    except CatalogCompileError as e:
        logger.error(f"Failed to get actool version: {e}")
        return None
    return parse_actool_version(proc.stdout or "")


def check_actool(config: Optional[CatalogConfig] = None) -> str:
    """
    Verify that actool is installed and at least config.min_version.

    Returns:
        The installed version string

    Raises:
        CatalogCompileError: MISSING, UNVERSIONED or TOO_OLD
    """
    config = config or CatalogConfig()
    try:
        proc = _run_version(config)
    except CatalogCompileError as e:
        if e.reason == CatalogCompileError.MISSING:
            raise
        raise CatalogCompileError(
            f"failed to get actool version: {e}", CatalogCompileError.UNVERSIONED, stderr=e.stderr
        ) from e

    version = parse_actool_version(proc.stdout or "")
    parsed = parse_version_tuple(version) if version else None
    if parsed is None:
        raise CatalogCompileError(
            f"failed to parse actool version from output: {version or '(none)'}",
            CatalogCompileError.UNVERSIONED,
        )

    if parsed < tuple(config.min_version):
        minimum = ".".join(str(part) for part in config.min_version)
        raise CatalogCompileError(
            f"actool version {version} is older than {minimum}; update Xcode and try again",
            CatalogCompileError.TOO_OLD,
        )
    return version


# ─────────────────────────────────────────────────────────────────────────────
# Compilation
# ─────────────────────────────────────────────────────────────────────────────

def actool_compile_args(icon_path: Path, output_path: Path, config: CatalogConfig) -> List[str]:
    """Command line for compiling icon_path into output_path."""
    return [
        config.actool,
        str(icon_path),
        "--compile", str(output_path),
        "--output-format", "human-readable-text",
        "--notices",
        "--warnings",
        "--output-partial-info-plist", str(output_path / PARTIAL_INFO_PLIST),
        "--app-icon", config.app_icon_name,
        "--include-all-app-icons",
        "--accent-color", "AccentColor",
        "--enable-on-demand-resources", "NO",
        "--development-region", "en",
        "--target-device", "mac",
        "--minimum-deployment-target", config.deployment_target,
        "--platform", "macosx",
    ]


def compile_catalog(
    icon_dir: Path,
    out_dir: Path,
    config: Optional[CatalogConfig] = None,
) -> Path:
    """
    Compile an Icon Composer document into out_dir/Assets.car.

    The document is copied into a temporary directory under the name
    actool expects for the app icon, then compiled there.

    Args:
        icon_dir: The ``*.icon`` directory
        out_dir: Destination directory for Assets.car

    Returns:
        Path to the copied Assets.car

    Raises:
        CatalogCompileError: On a missing/old tool, non-zero exit,
            missing output, or when icon_dir is not a directory
    """
    config = config or CatalogConfig()
    version = check_actool(config)
    logger.debug(f"Using actool {version}")

    if not icon_dir.is_dir():
        raise CatalogCompileError(
            f"{icon_dir} must be a directory", CatalogCompileError.NOT_DIRECTORY
        )

    with tempfile.TemporaryDirectory(prefix="icon_packer_actool_") as tmp:
        work = Path(tmp)
        icon_copy = work / f"{config.app_icon_name}.icon"
        output_path = work / "out"
        shutil.copytree(icon_dir, icon_copy)
        output_path.mkdir(parents=True, exist_ok=True)

        run_tool(actool_compile_args(icon_copy, output_path, config), timeout=config.timeout_s)

        generated = output_path / ASSETS_CAR_NAME
        if not generated.exists():
            raise CatalogCompileError(
                f"actool did not generate {ASSETS_CAR_NAME}", CatalogCompileError.NO_ARTIFACT
            )

        out_dir.mkdir(parents=True, exist_ok=True)
        dest = out_dir / ASSETS_CAR_NAME
        shutil.copyfile(generated, dest)

    logger.info(f"Compiled {icon_dir.name} into {dest}")
    return dest


def app_icon_name_from_assets_car(
    assets_car_path: Path,
    config: Optional[CatalogConfig] = None,
) -> Optional[str]:
    """
    Find the app icon name stored in an Assets.car.

    Runs ``assetutil --info`` and returns the Name of the first entry
    whose AssetType is "Icon Image". Returns None when the tool fails,
    its output is not JSON, or there is no such entry.
    """
    config = config or CatalogConfig()
    try:
        proc = run_tool([config.assetutil, "--info", str(assets_car_path)], timeout=config.timeout_s)
    except CatalogCompileError as e:
        logger.error(f"Failed to get app icon name from {assets_car_path.name}: {e}")
        return None

    try:
        entries = json.loads(proc.stdout or "")
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse {assets_car_path.name} info: {e}")
        return None
    if not isinstance(entries, list):
        logger.error(f"Unexpected assetutil output for {assets_car_path.name}: {type(entries).__name__}")
        return None

    for entry in entries:
        if isinstance(entry, dict) and entry.get("AssetType", "") == ICON_IMAGE_ASSET_TYPE:
            return entry.get("Name", "")
    return None
