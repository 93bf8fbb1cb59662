"""Load a package archive snapshot from YAML.

The expected shape is::

    packages:
      cl-lib: ["0.5", "0.6.1"]
      dash: ["2.12.0"]
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from elpkgcheck.models.version import VersionError
from elpkgcheck.registry.base import InMemoryRegistry

logger = logging.getLogger("elpkgcheck.registry")

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 20_000_000  # 20M characters
_MAX_DEPTH = 5

# Matches & at line start or after whitespace/sequence indicators, followed by
# an anchor name.  Archive snapshots never need anchors.
_ANCHOR_RE = re.compile(r"(?:^|[\s\-:\[,])&(\w+)", re.MULTILINE)


class RegistrySafetyError(Exception):
    """Raised when registry YAML is oversized or uses anchors/aliases."""


class RegistryFormatError(ValueError):
    """Raised when registry YAML does not have the expected shape."""


def _check_yaml_safety(content: str) -> None:
    if len(content) > _MAX_DOCUMENT_SIZE:
        raise RegistrySafetyError(
            f"Registry document exceeds maximum size "
            f"({len(content):,} chars > {_MAX_DOCUMENT_SIZE:,} limit)"
        )
    if _ANCHOR_RE.search(content):
        raise RegistrySafetyError("YAML anchors/aliases are not supported in registry files")


def _position(data: Any, key: str) -> str:
    """``line:col`` of *key* in a ruamel mapping, for error messages."""
    try:
        line, col = data.lc.key(key)
    except (AttributeError, KeyError, TypeError):
        return "?"
    return f"{line + 1}:{col + 1}"


def load_registry_string(content: str, filename: str = "<string>") -> InMemoryRegistry:
    """Build a registry from YAML text."""
    _check_yaml_safety(content)
    yaml = YAML()
    yaml.max_depth = _MAX_DEPTH
    data = yaml.load(content)
    registry = InMemoryRegistry()
    if data is None:
        return registry
    if not isinstance(data, CommentedMap) or "packages" not in data:
        raise RegistryFormatError(f"{filename}: expected a top-level 'packages' mapping")
    packages = data["packages"]
    if packages is None:
        return registry
    if not isinstance(packages, CommentedMap):
        raise RegistryFormatError(f"{filename}: 'packages' must be a mapping")

    for name in packages:
        versions = packages[name]
        where = f"{filename}:{_position(packages, name)}"
        if isinstance(versions, (str, int, float)):
            versions = [versions]
        if not isinstance(versions, list) or not versions:
            raise RegistryFormatError(f"{where}: '{name}' must list at least one version")
        # An unquoted 24.10 would load as the float 24.1.
        if any(isinstance(v, float) for v in versions):
            raise RegistryFormatError(f"{where}: '{name}' versions must be quoted strings")
        try:
            registry.add(str(name), [str(v) for v in versions])
        except VersionError as exc:
            raise RegistryFormatError(f"{where}: '{name}': {exc}") from exc

    logger.debug("Loaded %d packages from %s", len(registry), filename)
    return registry


def load_registry(path: Path) -> InMemoryRegistry:
    """Build a registry from a YAML file on disk."""
    with path.open("r", encoding="utf-8") as handle:
        content = handle.read()
    return load_registry_string(content, filename=str(path))
