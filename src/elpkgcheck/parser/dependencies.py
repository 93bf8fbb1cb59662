"""Parse the ``Package-Requires`` literal into validated dependencies."""

from __future__ import annotations

import re
from typing import Any

from elpkgcheck.models.diagnostics import Diagnostic, Severity
from elpkgcheck.models.package import Dependency, Header
from elpkgcheck.models.version import VersionError, parse_version
from elpkgcheck.parser.sexp import NIL, SexpParseError, Symbol, format_sexp, read_from_string
from elpkgcheck.parser.source import SourceText


class DependencyListParser:
    """Turns the text after ``Package-Requires:`` into ``Dependency`` records.

    Problems are appended to the caller's diagnostics list.  ``parse`` returns
    ``None`` when the literal as a whole is unusable, in which case no
    dependency checks should run for this header.
    """

    def __init__(self, source: SourceText) -> None:
        self._source = source

    def parse(self, header: Header, diagnostics: list[Diagnostic]) -> list[Dependency] | None:
        try:
            parsed, end = read_from_string(header.value)
        except SexpParseError as exc:
            diagnostics.append(
                _header_error(header, f"Couldn't parse the dependency header: {exc}")
            )
            return None
        if end != len(header.value):
            diagnostics.append(_header_error(header, "More than one expression provided."))
            return None
        if isinstance(parsed, Symbol) and parsed == NIL:
            parsed = []
        if not isinstance(parsed, list):
            diagnostics.append(
                _header_error(
                    header,
                    "Couldn't parse the dependency header: "
                    f"expected a list, got {format_sexp(parsed)}",
                )
            )
            return None

        deps: list[Dependency] = []
        for entry in parsed:
            dep = self._check_entry(entry, header, diagnostics)
            if dep is not None:
                deps.append(dep)
        return deps

    def _check_entry(
        self, entry: Any, header: Header, diagnostics: list[Diagnostic]
    ) -> Dependency | None:
        if not _is_well_formed(entry):
            diagnostics.append(
                _header_error(
                    header,
                    f'Expected (package-name "version-num"), but found {format_sexp(entry)}.',
                )
            )
            return None
        name, version_text = str(entry[0]), entry[1]
        column = self.dependency_column(header, name)
        try:
            version = parse_version(version_text)
        except VersionError:
            diagnostics.append(
                Diagnostic(
                    line=header.line,
                    column=column,
                    severity=Severity.ERROR,
                    message=f'"{version_text}" is not a valid version string.',
                )
            )
            return None
        return Dependency(package_name=name, version=version, line=header.line, column=column)

    def dependency_column(self, header: Header, name: str) -> int:
        """Column of the clause naming *name* on the header's line, else 1."""
        text = self._source.text
        line_start = self._source.line_start(header.line)
        line_end = self._source.line_end(header.value_start_offset)
        pattern = re.compile(r"[(\s]" + re.escape(name) + r"[\s)]")
        match = pattern.search(text, header.value_start_offset, line_end)
        if match is None:
            return 1
        return 1 + (match.start() - line_start)


def _is_well_formed(entry: Any) -> bool:
    return (
        isinstance(entry, list)
        and len(entry) == 2
        and isinstance(entry[0], Symbol)
        and isinstance(entry[1], str)
        and not isinstance(entry[1], Symbol)
    )


def _header_error(header: Header, message: str) -> Diagnostic:
    return Diagnostic(line=header.line, column=1, severity=Severity.ERROR, message=message)
