"""Dependency injection for FastAPI: PackageRegistry singleton."""

from __future__ import annotations

from elpkgcheck.registry.base import InMemoryRegistry, PackageRegistry

_registry: PackageRegistry | None = None


def init_registry(registry: PackageRegistry) -> None:
    """Set the global PackageRegistry (called at app startup)."""
    global _registry  # noqa: PLW0603
    _registry = registry


def get_registry() -> PackageRegistry:
    """FastAPI ``Depends`` provider for the PackageRegistry.

    Falls back to an empty registry when none was configured, so every
    non-emacs dependency is reported as not installable.
    """
    if _registry is None:
        return InMemoryRegistry()
    return _registry


def reset_registry() -> None:
    """Clear the global PackageRegistry (for tests)."""
    global _registry  # noqa: PLW0603
    _registry = None
