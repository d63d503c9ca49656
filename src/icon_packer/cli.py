"""
Command line interface for icon-packer.

    icon-packer pack OUTPUT.icns IMAGE [IMAGE ...]
    icon-packer bundle OUT_DIR ICON [ICON ...] --product-name NAME
    icon-packer inspect FILE.icns

Exit codes: 0 on success, 1 on a hard error, 2 on usage errors.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from icon_packer import __version__
from icon_packer.bundle import BundleError, CatalogConfig, bundle_icons, density_for_path
from icon_packer.core.models import UnsupportedPixelFormatError
from icon_packer.core.utils.file_locking import locked_write_bytes
from icon_packer.core.utils.logging_utils import configure_logging, detach_handler
from icon_packer.packer import (
    DecodeError,
    IcnsFormatError,
    IconCandidate,
    PackError,
    PackerConfig,
    open_image,
    pack_images,
    read_icns,
)
from icon_packer.packer.config import RESAMPLE_FILTERS

logger = logging.getLogger("icon_packer.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="icon-packer",
        description="Pack raster images into a macOS .icns icon family",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every slot decision")
    sub = parser.add_subparsers(dest="command", required=True)

    pack = sub.add_parser("pack", help="Pack images into one .icns file")
    pack.add_argument("output", type=Path, help="Destination .icns path")
    pack.add_argument("images", type=Path, nargs="+", help="Images in priority order (name@2x.png = retina)")
    pack.add_argument("--filter", choices=sorted(RESAMPLE_FILTERS), default="lanczos",
                      help="Downsampling filter (default: lanczos)")
    pack.add_argument("--defer-resized", action="store_true",
                      help="Let exact-size images win slots before resized ones")
    pack.add_argument("--report", type=Path, help="Write skipped-image diagnostics as JSON")

    bundle = sub.add_parser("bundle", help="Produce bundle icon artifacts from project icon files")
    bundle.add_argument("out_dir", type=Path, help="Output directory")
    bundle.add_argument("icons", type=Path, nargs="+", help="Icon files, .icns, .car or .icon documents")
    bundle.add_argument("--product-name", "-n", required=True, help="Stem of the generated .icns")
    bundle.add_argument("--defer-resized", action="store_true",
                        help="Let exact-size images win slots before resized ones")
    catalog = bundle.add_mutually_exclusive_group()
    catalog.add_argument("--require-catalog", dest="require_catalog", action="store_true", default=None,
                         help="Fail if Assets.car cannot be compiled")
    catalog.add_argument("--optional-catalog", dest="require_catalog", action="store_false",
                         help="Only warn if Assets.car cannot be compiled")
    bundle.add_argument("--actool", default="actool", help="actool executable")
    bundle.add_argument("--assetutil", default="assetutil", help="assetutil executable")

    inspect = sub.add_parser("inspect", help="List the records of an .icns file")
    inspect.add_argument("icns", type=Path)

    return parser


def _cmd_pack(args: argparse.Namespace) -> int:
    config = PackerConfig(resample_filter=args.filter, defer_resized=args.defer_resized)
    candidates = [
        IconCandidate(open_image(path), density_for_path(path), str(path))
        for path in args.images
    ]
    result = pack_images(candidates, config)
    locked_write_bytes(args.output, result.data)
    print(f"Wrote {args.output} ({len(result.data)} bytes, {len(result.slots)} icon(s))")
    if args.report:
        result.report().save(args.report)
    return 0


def _cmd_bundle(args: argparse.Namespace) -> int:
    result = bundle_icons(
        args.out_dir,
        args.icons,
        args.product_name,
        packer_config=PackerConfig(defer_resized=args.defer_resized),
        catalog_config=CatalogConfig(actool=args.actool, assetutil=args.assetutil),
        require_catalog=args.require_catalog,
    )
    if result.icns_path:
        print(f"Icon file: {result.icns_path}")
    if result.assets_car_path:
        name = f" (app icon: {result.app_icon_name})" if result.app_icon_name else ""
        print(f"Asset catalog: {result.assets_car_path}{name}")
    if not result.icns_path and not result.assets_car_path:
        print("No icon artifacts produced")
    return 0


def _cmd_inspect(args: argparse.Namespace) -> int:
    records = read_icns(args.icns.read_bytes())
    print(f"{args.icns}: {len(records)} record(s)")
    for record in records:
        tag = record.tag.decode("ascii", errors="replace")
        label = record.slot.label if record.slot else "?"
        print(f"  {tag}  {label:>10}  {record.length} bytes")
    return 0


COMMANDS = {
    "pack": _cmd_pack,
    "bundle": _cmd_bundle,
    "inspect": _cmd_inspect,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = configure_logging(verbose=args.verbose)
    try:
        return COMMANDS[args.command](args)
    except (PackError, UnsupportedPixelFormatError, DecodeError, IcnsFormatError, BundleError) as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    finally:
        detach_handler(handler)
