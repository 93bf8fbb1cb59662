"""Package metadata records extracted from header comments."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from elpkgcheck.models.version import Version


@dataclass(frozen=True)
class Header:
    """A ``;; Name: value`` line found in the source."""

    name: str
    value: str
    line: int
    value_start_offset: int


@dataclass(frozen=True)
class Dependency:
    """A validated ``(package-name "version")`` clause of Package-Requires."""

    package_name: str
    version: Version
    line: int
    column: int


class Descriptor(BaseModel):
    """The subset of package.el's descriptor the checks depend on."""

    name: str
    version: str
    summary: str
