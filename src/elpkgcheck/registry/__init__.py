"""Package registry: which versions of each package are installable."""

from elpkgcheck.registry.base import InMemoryRegistry, PackageRegistry
from elpkgcheck.registry.loader import (
    RegistryFormatError,
    RegistrySafetyError,
    load_registry,
    load_registry_string,
)

__all__ = [
    "InMemoryRegistry",
    "PackageRegistry",
    "RegistryFormatError",
    "RegistrySafetyError",
    "load_registry",
    "load_registry_string",
]
