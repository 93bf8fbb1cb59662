"""Domain models for elpkgcheck."""

from elpkgcheck.models.diagnostics import AnalysisResult, AnalysisStatus, Diagnostic, Severity
from elpkgcheck.models.package import Dependency, Descriptor, Header
from elpkgcheck.models.version import (
    SNAPSHOT_THRESHOLD,
    UNVERSIONED,
    Version,
    VersionError,
    compare_versions,
    min_version,
    parse_version,
)

__all__ = [
    "SNAPSHOT_THRESHOLD",
    "UNVERSIONED",
    "AnalysisResult",
    "AnalysisStatus",
    "Dependency",
    "Descriptor",
    "Diagnostic",
    "Header",
    "Severity",
    "Version",
    "VersionError",
    "compare_versions",
    "min_version",
    "parse_version",
]
