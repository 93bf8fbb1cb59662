"""Locate ``;; Name: value`` metadata headers in a source file."""

from __future__ import annotations

import re

from elpkgcheck.models.package import Header
from elpkgcheck.parser.source import SourceText

# Same prefix lisp-mnt.el accepts: one or more semicolons, whitespace, then an
# optional SCCS "@(#)" marker or RCS "$".
_HEADER_PREFIX = r"^;+[ \t]+(?:@\(#\))?[ \t]*\$?"

VERSION_HEADER = r"(?:Package-)?Version"
REQUIRES_HEADER = r"Package-Requires"
PACKAGE_VERSION_HEADER = r"Package-Version"


class HeaderScanner:
    """Finds the first header matching a name pattern, case-insensitively."""

    def __init__(self, source: SourceText) -> None:
        self._source = source

    def find_header(self, name_pattern: str) -> Header | None:
        """Return the first header whose name matches *name_pattern*.

        *name_pattern* is a regular expression and may be an alternation such
        as ``(?:Package-)?Version``.
        """
        regex = re.compile(
            _HEADER_PREFIX + r"(?P<name>" + name_pattern + r")[ \t]*:[ \t]*(?P<value>.*?)[ \t\r]*$",
            re.IGNORECASE | re.MULTILINE,
        )
        match = regex.search(self._source.text)
        if match is None:
            return None
        value_start = match.start("value")
        return Header(
            name=match.group("name"),
            value=match.group("value").strip(),
            line=self._source.line_of(match.start()),
            value_start_offset=value_start,
        )

    def find_version_header(self) -> Header | None:
        return self.find_header(VERSION_HEADER)

    def find_requires_header(self) -> Header | None:
        return self.find_header(REQUIRES_HEADER)

    def looks_like_package(self) -> bool:
        """True when a Package-Version or Package-Requires header is present."""
        return (
            self.find_header(PACKAGE_VERSION_HEADER) is not None
            or self.find_header(REQUIRES_HEADER) is not None
        )
