"""Tests for the package registry and its YAML loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from elpkgcheck.models.version import Version, VersionError
from elpkgcheck.registry.base import InMemoryRegistry
from elpkgcheck.registry.loader import (
    _MAX_DOCUMENT_SIZE,
    RegistryFormatError,
    RegistrySafetyError,
    load_registry,
    load_registry_string,
)
from tests.conftest import REGISTRY_YAML


class TestInMemoryRegistry:
    def test_lookup(self) -> None:
        reg = InMemoryRegistry({"dash": ["2.12.0", "2.10.0"], "s": [Version.of(1, 10)]})
        assert reg.lookup("dash") == [Version.of(2, 10, 0), Version.of(2, 12, 0)]
        assert reg.lookup("s") == [Version.of(1, 10)]
        assert reg.lookup("missing") is None
        assert len(reg) == 2

    def test_duplicates_collapse(self) -> None:
        reg = InMemoryRegistry({"a": ["1", "1.0", "2"]})
        assert len(reg.lookup("a") or []) == 2

    def test_invalid_version(self) -> None:
        with pytest.raises(VersionError):
            InMemoryRegistry({"a": ["latest"]})

    def test_lookup_returns_copy(self) -> None:
        reg = InMemoryRegistry({"a": ["1"]})
        versions = reg.lookup("a")
        assert versions is not None
        versions.clear()
        assert reg.lookup("a") == [Version.of(1)]


class TestLoadRegistry:
    def test_load_string(self) -> None:
        reg = load_registry_string(REGISTRY_YAML)
        assert len(reg) == 3
        assert [str(v) for v in reg.lookup("cl-lib") or []] == ["0.5", "0.6.1"]
        assert [str(v) for v in reg.lookup("s") or []] == ["1.10.0"]

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "archive.yaml"
        path.write_text(REGISTRY_YAML, encoding="utf-8")
        reg = load_registry(path)
        assert reg.lookup("dash") is not None

    def test_empty_document(self) -> None:
        assert len(load_registry_string("")) == 0
        assert len(load_registry_string("packages:\n")) == 0

    def test_integer_versions(self) -> None:
        reg = load_registry_string("packages:\n  a: [1, 2]\n")
        assert reg.lookup("a") == [Version.of(1), Version.of(2)]

    def test_unquoted_float_rejected(self) -> None:
        with pytest.raises(RegistryFormatError, match="must be quoted"):
            load_registry_string("packages:\n  a: [24.10]\n")

    def test_missing_packages_key(self) -> None:
        with pytest.raises(RegistryFormatError, match="'packages'"):
            load_registry_string("archive:\n  a: ['1']\n")

    def test_bad_version_reports_position(self) -> None:
        with pytest.raises(RegistryFormatError, match=r"<string>:3:\d+: 'b'"):
            load_registry_string("packages:\n  a: ['1']\n  b: ['x.y']\n")

    def test_empty_version_list(self) -> None:
        with pytest.raises(RegistryFormatError, match="at least one version"):
            load_registry_string("packages:\n  a: []\n")

    def test_anchor_rejected(self) -> None:
        yaml = "packages:\n  a: &v ['1']\n  b: *v\n"
        with pytest.raises(RegistrySafetyError, match="anchors/aliases"):
            load_registry_string(yaml)

    def test_ampersand_in_comment_allowed(self) -> None:
        reg = load_registry_string("# R&D mirror\npackages:\n  a: ['1']\n")
        assert reg.lookup("a") == [Version.of(1)]

    def test_size_limit(self) -> None:
        with pytest.raises(RegistrySafetyError, match="maximum size"):
            load_registry_string("#" * (_MAX_DOCUMENT_SIZE + 1))
