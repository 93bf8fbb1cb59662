"""Boundary calls for hosts: analyse one file's text, or test whether it is a package."""

from __future__ import annotations

import logging

from elpkgcheck.checker.engine import PackageChecker
from elpkgcheck.models.diagnostics import AnalysisResult, AnalysisStatus
from elpkgcheck.parser.descriptor import DescriptorParser
from elpkgcheck.parser.headers import HeaderScanner
from elpkgcheck.parser.source import SourceText
from elpkgcheck.registry.base import PackageRegistry

logger = logging.getLogger("elpkgcheck.service")


def looks_like_package(text: str) -> bool:
    """True when *text* has a Package-Version or Package-Requires header."""
    return HeaderScanner(SourceText(text)).looks_like_package()


def run_analysis(
    text: str,
    registry: PackageRegistry | None = None,
    descriptor_parser: DescriptorParser | None = None,
) -> AnalysisResult:
    """Check one file and return its diagnostics.

    Files without package headers are ``skipped``.  Problems in the metadata
    are reported as diagnostics; an unexpected failure of the analysis itself
    yields an ``errored`` result instead of raising.
    """
    try:
        source = SourceText(text)
        if not HeaderScanner(source).looks_like_package():
            logger.debug("Skipping analysis: no package headers (length=%d)", len(text))
            return AnalysisResult(status=AnalysisStatus.SKIPPED)
        checker = PackageChecker(registry=registry, descriptor_parser=descriptor_parser)
        diagnostics = checker.check(source)
    except Exception as exc:
        logger.exception("Package analysis failed")
        return AnalysisResult(status=AnalysisStatus.ERRORED, message=str(exc))

    logger.debug("Analysis finished with %d diagnostics", len(diagnostics))
    return AnalysisResult(status=AnalysisStatus.FINISHED, diagnostics=diagnostics)
