"""
Tests for strategy selection and the two packaging strategies.
"""

import json
import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from icon_packer.bundle.actool import CatalogCompileError
from icon_packer.bundle.config import CatalogConfig
from icon_packer.bundle.strategies import (
    CatalogCompilerStrategy,
    FlatImageStrategy,
    select_strategies,
)
from icon_packer.core.models import SlotType
from icon_packer.packer import EmptyFamilyError, IconWriteError, read_icns

RUN = "icon_packer.bundle.actool.subprocess.run"


def _fake_tools(args, **kwargs):
    if "--version" in args:
        return subprocess.CompletedProcess(args, 0, stdout="short-bundle-version: 26.0\n", stderr="")
    if "--compile" in args:
        out = Path(args[args.index("--compile") + 1])
        (out / "Assets.car").write_bytes(b"car")
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")
    info = [{"AssetType": "Icon Image", "Name": "Icon"}]
    return subprocess.CompletedProcess(args, 0, stdout=json.dumps(info), stderr="")


@pytest.fixture
def icon_doc(tmp_path: Path) -> Path:
    doc = tmp_path / "src" / "AppIcon.icon"
    doc.mkdir(parents=True)
    (doc / "icon.json").write_text("{}")
    return doc


class TestSelectStrategies:

    def test_select_when_only_flat_then_flat_only(self):
        strategies = select_strategies([Path("32x32.png")], "App")
        assert [s.name for s in strategies] == ["flat"]

    def test_select_when_only_catalog_then_catalog_required(self):
        strategies = select_strategies([Path("AppIcon.icon")], "App")
        assert [s.name for s in strategies] == ["catalog"]
        assert strategies[0].required is True

    def test_select_when_both_then_catalog_optional(self):
        strategies = select_strategies([Path("a.png"), Path("AppIcon.icon")], "App")
        assert [s.name for s in strategies] == ["flat", "catalog"]
        assert strategies[1].required is False

    def test_select_when_require_catalog_forced_then_respected(self):
        strategies = select_strategies(
            [Path("a.png"), Path("AppIcon.icon")], "App", require_catalog=True
        )
        assert strategies[1].required is True

    def test_select_when_empty_then_nothing(self):
        assert select_strategies([], "App") == []

    def test_inputs_when_mixed_then_partitioned(self):
        paths = [Path("a.png"), Path("Assets.car"), Path("b@2x.png"), Path("AppIcon.icon")]
        flat, catalog = select_strategies(paths, "App")
        assert flat.inputs == [Path("a.png"), Path("b@2x.png")]
        assert catalog.inputs == [Path("Assets.car"), Path("AppIcon.icon")]


class TestFlatImageStrategy:

    def test_package_when_pngs_then_icns_written(self, write_png, tmp_path):
        paths = [write_png("icons/32x32.png", 32), write_png("icons/128x128@2x.png", 256)]
        out_dir = tmp_path / "out"
        outcome = FlatImageStrategy(paths, "MyApp").package(out_dir)

        assert outcome.artifact == out_dir / "MyApp.icns"
        assert outcome.slots == (SlotType.ICP5, SlotType.IC13)
        records = read_icns(outcome.artifact.read_bytes())
        assert [r.tag for r in records] == [b"icp5", b"ic13"]

    def test_package_when_existing_icns_then_copied(self, write_png, tmp_path):
        existing = tmp_path / "icons" / "ready.icns"
        existing.parent.mkdir(parents=True)
        existing.write_bytes(b"icns\x00\x00\x00\x08")
        paths = [write_png("icons/32x32.png", 32), existing]

        outcome = FlatImageStrategy(paths, "MyApp").package(tmp_path / "out")
        assert outcome.artifact == tmp_path / "out" / "ready.icns"
        assert outcome.artifact.read_bytes() == existing.read_bytes()
        assert not (tmp_path / "out" / "MyApp.icns").exists()

    def test_package_when_no_usable_sizes_then_empty_family(self, write_png, tmp_path):
        paths = [write_png("tiny@2x.png", 17)]
        with pytest.raises(EmptyFamilyError):
            FlatImageStrategy(paths, "MyApp").package(tmp_path / "out")

    def test_package_when_no_flat_inputs_then_no_artifact(self, tmp_path):
        outcome = FlatImageStrategy([Path("AppIcon.icon")], "MyApp").package(tmp_path)
        assert outcome.artifact is None

    def test_package_when_write_fails_then_icon_write_error(self, write_png, tmp_path):
        paths = [write_png("32x32.png", 32)]
        with patch("icon_packer.bundle.strategies.locked_write_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(IconWriteError) as exc_info:
                FlatImageStrategy(paths, "MyApp").package(tmp_path / "out")
        assert exc_info.value.path.endswith("MyApp.icns")

    def test_init_when_empty_product_name_then_raises(self):
        with pytest.raises(ValueError):
            FlatImageStrategy([Path("a.png")], "")


class TestCatalogCompilerStrategy:

    def test_package_when_icon_document_then_assets_car(self, icon_doc, tmp_path):
        with patch(RUN, side_effect=_fake_tools):
            outcome = CatalogCompilerStrategy([icon_doc], CatalogConfig()).package(tmp_path / "out")
        assert outcome.artifact == tmp_path / "out" / "Assets.car"
        assert outcome.app_icon_name == "Icon"

    def test_package_when_existing_car_then_copied_without_tools(self, tmp_path):
        car = tmp_path / "Assets.car"
        car.write_bytes(b"prebuilt")
        with patch(RUN) as run:
            outcome = CatalogCompilerStrategy([car]).package(tmp_path / "out")
        run.assert_not_called()
        assert outcome.artifact.read_bytes() == b"prebuilt"

    def test_package_when_optional_and_actool_missing_then_warning(self, icon_doc, tmp_path):
        with patch(RUN, side_effect=FileNotFoundError("actool")):
            outcome = CatalogCompilerStrategy([icon_doc], required=False).package(tmp_path / "out")
        assert outcome.artifact is None
        assert len(outcome.warnings) == 1

    def test_package_when_required_and_actool_missing_then_raises(self, icon_doc, tmp_path):
        with patch(RUN, side_effect=FileNotFoundError("actool")):
            with pytest.raises(CatalogCompileError):
                CatalogCompilerStrategy([icon_doc], required=True).package(tmp_path / "out")
