"""Rule engine producing diagnostics for package metadata."""

from elpkgcheck.checker.engine import MAX_SUMMARY_LENGTH, PackageChecker

__all__ = ["MAX_SUMMARY_LENGTH", "PackageChecker"]
