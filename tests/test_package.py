"""
Tests for package metadata.
"""

import icon_packer


def test_version_when_imported_then_matches_pyproject():
    assert icon_packer.__version__ == "0.3.0"


def test_copyright_when_imported_then_names_license():
    assert "MIT License" in icon_packer.__copyright__
