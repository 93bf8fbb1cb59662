"""Package metadata checks: version header, lexical-binding, summary, dependencies."""

from __future__ import annotations

from elpkgcheck.models.diagnostics import Diagnostic, Severity
from elpkgcheck.models.package import Dependency
from elpkgcheck.models.version import (
    SNAPSHOT_THRESHOLD,
    Version,
    VersionError,
    min_version,
    parse_version,
)
from elpkgcheck.parser.dependencies import DependencyListParser
from elpkgcheck.parser.descriptor import DescriptorParser, PackageHeaderParser
from elpkgcheck.parser.headers import HeaderScanner
from elpkgcheck.parser.local_vars import LexicalBindingDetector, LexicalBindingInfo
from elpkgcheck.parser.source import SourceText
from elpkgcheck.registry.base import InMemoryRegistry, PackageRegistry

MAX_SUMMARY_LENGTH = 50
EMACS = "emacs"
CL_LIB = "cl-lib"
MIN_EMACS_VERSION = Version.of(24)
CL_LIB_LEGACY_VERSION = Version.of(1)


class PackageChecker:
    """Runs every package check over one source file, in a fixed order."""

    def __init__(
        self,
        registry: PackageRegistry | None = None,
        descriptor_parser: DescriptorParser | None = None,
    ) -> None:
        self._registry = registry if registry is not None else InMemoryRegistry()
        self._descriptor_parser = descriptor_parser or PackageHeaderParser()

    def check(self, source: SourceText) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        headers = HeaderScanner(source)
        if not headers.looks_like_package():
            return diagnostics
        self._check_version_header(source, headers, diagnostics)
        lexical = LexicalBindingDetector(source).check_placement(diagnostics)
        self._check_descriptor(source, headers, diagnostics)
        self._check_dependencies(source, headers, lexical, diagnostics)
        return diagnostics

    # -- version header ------------------------------------------------------

    def _check_version_header(
        self, source: SourceText, headers: HeaderScanner, diagnostics: list[Diagnostic]
    ) -> None:
        header = headers.find_version_header()
        if header is None:
            diagnostics.append(
                Diagnostic(
                    line=1,
                    column=1,
                    severity=Severity.WARNING,
                    message=(
                        '"Version:" or "Package-Version:" header is missing. '
                        "MELPA will handle this, but other archives will not."
                    ),
                )
            )
            return
        try:
            parse_version(header.value)
        except VersionError:
            diagnostics.append(
                Diagnostic(
                    line=header.line,
                    column=source.column_of(header.value_start_offset),
                    severity=Severity.WARNING,
                    message=f'"{header.value}" is not a valid version.',
                )
            )

    # -- descriptor / summary ------------------------------------------------

    def _check_descriptor(
        self, source: SourceText, headers: HeaderScanner, diagnostics: list[Diagnostic]
    ) -> None:
        text = source.text
        if headers.find_version_header() is None:
            # package.el requires a version header; parse a copy with a dummy one.
            first_line_end = source.line_end(0)
            if first_line_end < len(text):
                text = source.with_insertion(first_line_end + 1, ";; Version: 0\n").text
            else:
                text = source.with_insertion(first_line_end, "\n;; Version: 0\n").text
        try:
            descriptor = self._descriptor_parser.parse(text)
        except Exception as exc:  # noqa: BLE001
            diagnostics.append(
                Diagnostic(
                    line=1,
                    column=1,
                    severity=Severity.ERROR,
                    message=f"package.el cannot parse this buffer: {exc}",
                )
            )
            return

        summary = descriptor.summary
        if not summary:
            diagnostics.append(
                Diagnostic(
                    line=1,
                    column=1,
                    severity=Severity.WARNING,
                    message="Package should have a non-empty summary.",
                )
            )
        elif len(summary) > MAX_SUMMARY_LENGTH:
            diagnostics.append(
                Diagnostic(
                    line=1,
                    column=1,
                    severity=Severity.WARNING,
                    message=(
                        "The package summary is too long. "
                        f"It should be at most {MAX_SUMMARY_LENGTH} characters."
                    ),
                )
            )

    # -- dependencies --------------------------------------------------------

    def _check_dependencies(
        self,
        source: SourceText,
        headers: HeaderScanner,
        lexical: LexicalBindingInfo,
        diagnostics: list[Diagnostic],
    ) -> None:
        header = headers.find_requires_header()
        deps: list[Dependency] = []
        if header is not None:
            parsed = DependencyListParser(source).parse(header, diagnostics)
            if parsed is None:
                return
            deps = parsed
        self._check_installable(deps, diagnostics)
        self._check_non_snapshot(deps, diagnostics)
        self._check_non_zero(deps, diagnostics)
        self._check_lexical_binding_requires_emacs_24(deps, lexical, diagnostics)
        self._check_legacy_cl_lib(deps, diagnostics)

    def _check_installable(self, deps: list[Dependency], diagnostics: list[Diagnostic]) -> None:
        for dep in deps:
            if dep.package_name == EMACS:
                if dep.version < MIN_EMACS_VERSION:
                    diagnostics.append(
                        _at(
                            dep,
                            Severity.ERROR,
                            "You can only depend on Emacs version 24 or greater.",
                        )
                    )
                continue
            available = self._registry.lookup(dep.package_name)
            if not available:
                diagnostics.append(
                    _at(dep, Severity.ERROR, f"Package {dep.package_name} is not installable.")
                )
                continue
            best = min_version(available)
            if best < dep.version:
                diagnostics.append(
                    _at(
                        dep,
                        Severity.WARNING,
                        f"Version dependency for {dep.package_name} appears too high: try {best}",
                    )
                )

    def _check_non_snapshot(self, deps: list[Dependency], diagnostics: list[Diagnostic]) -> None:
        for dep in deps:
            # [0] counts as a snapshot too: it pins nothing.
            if dep.version.is_unversioned or not dep.version < SNAPSHOT_THRESHOLD:
                diagnostics.append(
                    _at(
                        dep,
                        Severity.WARNING,
                        f'Use a non-snapshot version number for dependency on "{dep.package_name}" '
                        "if possible.",
                    )
                )

    def _check_non_zero(self, deps: list[Dependency], diagnostics: list[Diagnostic]) -> None:
        for dep in deps:
            if dep.version.is_unversioned:
                diagnostics.append(
                    _at(
                        dep,
                        Severity.WARNING,
                        f'Use a properly versioned dependency on "{dep.package_name}" if possible.',
                    )
                )

    def _check_lexical_binding_requires_emacs_24(
        self,
        deps: list[Dependency],
        lexical: LexicalBindingInfo,
        diagnostics: list[Diagnostic],
    ) -> None:
        if not (lexical.declared_on_first_line and lexical.first_line_value):
            return
        if any(d.package_name == EMACS and d.version >= MIN_EMACS_VERSION for d in deps):
            return
        diagnostics.append(
            Diagnostic(
                line=lexical.line,
                column=lexical.column,
                severity=Severity.WARNING,
                message='You should depend on (emacs "24") if you need lexical-binding.',
            )
        )

    def _check_legacy_cl_lib(self, deps: list[Dependency], diagnostics: list[Diagnostic]) -> None:
        for dep in deps:
            if dep.package_name == CL_LIB and dep.version >= CL_LIB_LEGACY_VERSION:
                diagnostics.append(
                    _at(
                        dep,
                        Severity.ERROR,
                        "Depend on the latest 0.x version of cl-lib rather than on "
                        f'version "{dep.version}". Alternatively, depend on (emacs "24.3"), '
                        "which already includes the latest version.",
                    )
                )


def _at(dep: Dependency, severity: Severity, message: str) -> Diagnostic:
    return Diagnostic(line=dep.line, column=dep.column, severity=severity, message=message)
