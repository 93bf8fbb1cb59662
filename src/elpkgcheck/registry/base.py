"""Package registry interface and an in-memory implementation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Protocol

from elpkgcheck.models.version import Version, parse_version


class PackageRegistry(Protocol):
    """Source of truth for which package versions can be installed."""

    def lookup(self, name: str) -> list[Version] | None:
        """Installable versions of *name*, or ``None`` if it is unknown."""
        ...


class InMemoryRegistry:
    """Registry backed by a plain mapping of package name to versions."""

    def __init__(self, packages: Mapping[str, Iterable[Version | str]] | None = None) -> None:
        self._packages: dict[str, list[Version]] = {}
        for name, versions in (packages or {}).items():
            self.add(name, versions)

    def add(self, name: str, versions: Iterable[Version | str]) -> None:
        parsed = [v if isinstance(v, Version) else parse_version(v) for v in versions]
        self._packages[name] = sorted(set(parsed))

    def lookup(self, name: str) -> list[Version] | None:
        versions = self._packages.get(name)
        return list(versions) if versions is not None else None

    def __len__(self) -> int:
        return len(self._packages)
