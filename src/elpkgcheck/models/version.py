"""Dotted-numeric version vectors with zero-padded ordering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


class VersionError(ValueError):
    """Raised when a string is not a dotted sequence of non-negative integers."""


@dataclass(frozen=True, eq=False)
class Version:
    """An ordered sequence of non-negative integers, e.g. ``24.3`` -> ``(24, 3)``.

    Missing trailing components compare as zero, so ``Version((24,)) ==
    Version((24, 0))`` while ``Version((24,)) < Version((24, 1))``.
    """

    components: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.components:
            raise VersionError("A version needs at least one component")
        if any(c < 0 for c in self.components):
            raise VersionError(f"Negative version component in {self.components!r}")

    @classmethod
    def of(cls, *components: int) -> Version:
        return cls(tuple(components))

    @property
    def is_unversioned(self) -> bool:
        """True only for the exact ``[0]`` marker."""
        return self.components == (0,)

    def _key(self) -> tuple[int, ...]:
        key = list(self.components)
        while len(key) > 1 and key[-1] == 0:
            key.pop()
        return tuple(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return compare_versions(self, other) == 0

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: Version) -> bool:
        return compare_versions(self, other) < 0

    def __le__(self, other: Version) -> bool:
        return compare_versions(self, other) <= 0

    def __gt__(self, other: Version) -> bool:
        return compare_versions(self, other) > 0

    def __ge__(self, other: Version) -> bool:
        return compare_versions(self, other) >= 0

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)


# Calendar-style snapshot builds are numbered YYYYMMDD.HHMM; nothing released
# before 1900-12-01 uses that scheme.
SNAPSHOT_THRESHOLD = Version.of(19001201, 1)
UNVERSIONED = Version.of(0)


def parse_version(text: str) -> Version:
    """Parse ``"24.3"`` into ``Version((24, 3))``.

    Raises ``VersionError`` for empty strings, empty segments (leading,
    trailing or doubled dots) and non-digit segments.
    """
    if not text:
        raise VersionError("Empty version string")
    components: list[int] = []
    for segment in text.split("."):
        if not segment:
            raise VersionError(f"Empty component in version {text!r}")
        if not (segment.isascii() and segment.isdigit()):
            raise VersionError(f"Non-numeric component {segment!r} in version {text!r}")
        components.append(int(segment))
    return Version(tuple(components))


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1 comparing *a* and *b* with zero padding."""
    width = max(len(a.components), len(b.components))
    left = a.components + (0,) * (width - len(a.components))
    right = b.components + (0,) * (width - len(b.components))
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def min_version(versions: Iterable[Version]) -> Version:
    """Return the least version; raises ``ValueError`` if *versions* is empty."""
    lowest: Version | None = None
    for version in versions:
        if lowest is None or version < lowest:
            lowest = version
    if lowest is None:
        raise ValueError("min_version() arg is an empty sequence")
    return lowest
