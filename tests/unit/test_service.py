"""Tests for the run_analysis / looks_like_package boundary calls."""

from __future__ import annotations

import logging

import pytest

import elpkgcheck
from elpkgcheck.models.diagnostics import AnalysisStatus, Severity
from elpkgcheck.models.version import Version
from elpkgcheck.registry.base import InMemoryRegistry
from elpkgcheck.service.analysis import looks_like_package, run_analysis
from tests.conftest import SAMPLE_PACKAGE, make_package


class ExplodingRegistry:
    def lookup(self, name: str) -> list[Version] | None:
        raise RuntimeError(f"registry unavailable while looking up {name}")


class TestLooksLikePackage:
    def test_sample(self) -> None:
        assert looks_like_package(SAMPLE_PACKAGE)

    def test_plain_file(self) -> None:
        assert not looks_like_package(";;; init.el --- My config\n(setq x 1)\n")

    def test_exported_at_top_level(self) -> None:
        assert elpkgcheck.looks_like_package is looks_like_package
        assert elpkgcheck.run_analysis is run_analysis


class TestRunAnalysis:
    def test_finished_clean(self, registry: InMemoryRegistry) -> None:
        result = run_analysis(SAMPLE_PACKAGE, registry=registry)
        assert result.status == AnalysisStatus.FINISHED
        assert result.diagnostics == []
        assert result.message is None

    def test_skipped(self) -> None:
        result = run_analysis("(message \"not a package\")\n")
        assert result.status == AnalysisStatus.SKIPPED
        assert result.diagnostics == []

    def test_default_registry_is_empty(self) -> None:
        result = run_analysis(make_package(requires='((emacs "24") (dash "2.12.0"))'))
        assert result.status == AnalysisStatus.FINISHED
        assert [d.message for d in result.diagnostics] == ["Package dash is not installable."]
        assert result.errors == result.diagnostics
        assert result.warnings == []

    def test_diagnostics_carry_checker_name(self, registry: InMemoryRegistry) -> None:
        result = run_analysis(make_package(requires="((foo))"), registry=registry)
        assert result.diagnostics[0].checker == "emacs-lisp-package"
        assert result.diagnostics[0].severity == Severity.ERROR

    def test_unexpected_failure_is_errored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="elpkgcheck.service"):
            result = run_analysis(
                make_package(requires='((dash "1"))'), registry=ExplodingRegistry()
            )
        assert result.status == AnalysisStatus.ERRORED
        assert result.diagnostics == []
        assert result.message == "registry unavailable while looking up dash"
        assert "Package analysis failed" in caplog.text

    def test_independent_invocations(self, registry: InMemoryRegistry) -> None:
        first = run_analysis(make_package(requires="((foo))"), registry=registry)
        second = run_analysis(SAMPLE_PACKAGE, registry=registry)
        assert len(first.diagnostics) == 1
        assert second.diagnostics == []
