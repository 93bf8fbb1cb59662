"""Default package descriptor parser, modelled on package.el's buffer parsing."""

from __future__ import annotations

import re
from typing import Protocol

from elpkgcheck.models.package import Descriptor
from elpkgcheck.models.version import VersionError, parse_version
from elpkgcheck.parser.headers import HeaderScanner
from elpkgcheck.parser.source import SourceText

_FILE_HEADER_RE = re.compile(
    r"\A;;; (?P<name>[^ ]*)\.el ---[ \t]*(?P<summary>.*?)[ \t]*(?:-\*-.*-\*-[ \t]*)?\r?$",
    re.MULTILINE,
)


class DescriptorError(ValueError):
    """Raised when a buffer cannot be read as a single-file package."""


class DescriptorParser(Protocol):
    """Anything that turns package source into a ``Descriptor``."""

    def parse(self, text: str) -> Descriptor: ...


class PackageHeaderParser:
    """Reads name, version and summary from a single-file package.

    Requires the ``;;; NAME.el --- SUMMARY`` first line, a version header and
    the ``;;; NAME.el ends here`` footer, as package.el does.
    """

    def parse(self, text: str) -> Descriptor:
        match = _FILE_HEADER_RE.match(text)
        if match is None:
            raise DescriptorError("Package lacks a file header")
        name = match.group("name")
        footer = re.compile(r"^;;; " + re.escape(name) + r"\.el ends here", re.MULTILINE)
        if footer.search(text) is None:
            raise DescriptorError("Package lacks a terminating comment")

        header = HeaderScanner(SourceText(text)).find_version_header()
        if header is None:
            raise DescriptorError('Package lacks a "Version" or "Package-Version" header')
        try:
            version = parse_version(header.value)
        except VersionError as exc:
            raise DescriptorError(f"Invalid version {header.value!r}: {exc}") from exc

        return Descriptor(name=name, version=str(version), summary=match.group("summary"))
