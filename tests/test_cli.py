"""
Tests for the icon-packer command line.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from icon_packer.cli import build_parser, main
from icon_packer.packer import read_icns


class TestPackCommand:

    def test_pack_when_valid_images_then_exit_zero_and_file_written(self, write_png, tmp_path, capsys):
        out = tmp_path / "App.icns"
        argv = ["pack", str(out), str(write_png("512.png", 512)), str(write_png("icon@2x.png", 64))]

        assert main(argv) == 0
        assert [r.tag for r in read_icns(out.read_bytes())] == [b"ic09", b"ic12"]
        assert "2 icon(s)" in capsys.readouterr().out

    def test_pack_when_report_requested_then_json_saved(self, write_png, tmp_path):
        out = tmp_path / "App.icns"
        report = tmp_path / "report.json"
        argv = [
            "pack", str(out),
            str(write_png("a.png", 32)), str(write_png("b.png", 32)),
            "--report", str(report),
        ]

        assert main(argv) == 0
        assert json.loads(report.read_text())["summary_by_kind"] == {"duplicate_slot": 1}

    def test_pack_when_no_usable_images_then_exit_one(self, write_png, tmp_path, capsys):
        out = tmp_path / "App.icns"
        assert main(["pack", str(out), str(write_png("big.png", 1024))]) == 1
        assert not out.exists()
        assert "error:" in capsys.readouterr().err

    def test_pack_when_missing_input_then_exit_one(self, tmp_path):
        assert main(["pack", str(tmp_path / "App.icns"), str(tmp_path / "nope.png")]) == 1

    def test_pack_when_image_exceeds_bomb_limit_then_exit_one(self, oversized_png, tmp_path, capsys):
        huge = tmp_path / "huge.png"
        huge.write_bytes(oversized_png)
        out = tmp_path / "App.icns"

        assert main(["pack", str(out), str(huge)]) == 1
        assert not out.exists()
        assert "huge.png" in capsys.readouterr().err

    def test_pack_when_unknown_filter_then_usage_error(self, write_png, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["pack", str(tmp_path / "x.icns"), str(write_png("a.png", 16)), "--filter", "nearest"])
        assert exc_info.value.code == 2


class TestInspectCommand:

    def test_inspect_when_packed_file_then_lists_records(self, write_png, tmp_path, capsys):
        out = tmp_path / "App.icns"
        main(["pack", str(out), str(write_png("16.png", 16))])
        capsys.readouterr()

        assert main(["inspect", str(out)]) == 0
        output = capsys.readouterr().out
        assert "1 record(s)" in output
        assert "icp4" in output
        assert "16pt@1x" in output

    def test_inspect_when_not_icns_then_exit_one(self, tmp_path):
        bogus = tmp_path / "bogus.icns"
        bogus.write_bytes(b"PNG not an icns file")
        assert main(["inspect", str(bogus)]) == 1


class TestBundleCommand:

    def test_bundle_when_flat_icons_then_icns_reported(self, write_png, tmp_path, capsys):
        out_dir = tmp_path / "Resources"
        argv = ["bundle", str(out_dir), str(write_png("128x128.png", 128)), "-n", "MyApp"]

        assert main(argv) == 0
        assert (out_dir / "MyApp.icns").exists()
        assert "MyApp.icns" in capsys.readouterr().out

    def test_bundle_when_required_catalog_missing_tool_then_exit_one(self, tmp_path):
        doc = tmp_path / "AppIcon.icon"
        doc.mkdir()
        with patch("icon_packer.bundle.actool.subprocess.run", side_effect=FileNotFoundError("actool")):
            code = main(["bundle", str(tmp_path / "out"), str(doc), "-n", "MyApp", "--actool", "/no/actool"])
        assert code == 1

    def test_bundle_help_when_printed_then_defer_resized_documented(self, capsys):
        with pytest.raises(SystemExit):
            main(["bundle", "--help"])
        help_text = " ".join(capsys.readouterr().out.split())
        assert "Let exact-size images win slots before resized ones" in help_text

    def test_parser_when_bundle_flags_then_catalog_choice_parsed(self):
        parser = build_parser()
        assert parser.parse_args(["bundle", "out", "a.png", "-n", "A"]).require_catalog is None
        assert parser.parse_args(["bundle", "out", "a.png", "-n", "A", "--optional-catalog"]).require_catalog is False
        assert parser.parse_args(["bundle", "out", "a.png", "-n", "A", "--require-catalog"]).require_catalog is True


def test_main_when_verbose_then_debug_records_emitted(write_png, tmp_path, capsys):
    out = tmp_path / "App.icns"
    assert main(["-v", "pack", str(out), str(write_png("40.png", 40))]) == 0
    assert "Filled icp5" in capsys.readouterr().err


def test_main_when_no_command_then_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
