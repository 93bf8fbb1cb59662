"""FastMCP server exposing elpkgcheck's package checks as MCP tools.

Run via::

    elpkgcheck-mcp                       # reads .env (default: stdio)
    MCP_TRANSPORT=http elpkgcheck-mcp    # streamable HTTP on port 9000
    MCP_TRANSPORT=sse  elpkgcheck-mcp    # legacy SSE on port 9000

The package registry is loaded once at startup from ``REGISTRY_FILE`` when
set; otherwise it is empty and every non-emacs dependency is reported as not
installable.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from elpkgcheck import __version__
from elpkgcheck.models.diagnostics import AnalysisStatus
from elpkgcheck.models.version import min_version
from elpkgcheck.parser.source import SourceSafetyError
from elpkgcheck.registry.base import InMemoryRegistry, PackageRegistry
from elpkgcheck.registry.loader import load_registry
from elpkgcheck.service.analysis import looks_like_package as _looks_like_package
from elpkgcheck.service.analysis import run_analysis
from elpkgcheck.settings import Settings

# ---------------------------------------------------------------------------
# Server + shared state
# ---------------------------------------------------------------------------

logger = logging.getLogger("elpkgcheck.mcp")

mcp = FastMCP("elpkgcheck")
_registry: PackageRegistry = InMemoryRegistry()


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool
def analyze_package(source: str) -> str:
    """Check the package headers of an Emacs Lisp file.

    Validates the Version/Package-Version header, the summary on the first
    line, the Package-Requires dependency list and the placement of the
    lexical-binding cookie.  Returns one line per diagnostic as
    ``LINE:COLUMN SEVERITY MESSAGE``.

    Args:
        source: Full text of the .el file.
    """
    logger.info("analyze_package called (source length=%d)", len(source))
    result = run_analysis(source, registry=_registry)
    if result.status == AnalysisStatus.ERRORED:
        raise ToolError(f"Analysis failed: {result.message}")
    if result.status == AnalysisStatus.SKIPPED:
        return (
            "Not a package: no Package-Version or Package-Requires header found, "
            "so no checks were run."
        )
    if not result.diagnostics:
        return "No problems found."

    lines = [f"{len(result.errors)} error(s), {len(result.warnings)} warning(s):"]
    for d in result.diagnostics:
        lines.append(f"  {d.line}:{d.column} {d.severity} {d.message}")
    return "\n".join(lines)


@mcp.tool
def looks_like_package(source: str) -> str:
    """Report whether a file carries Package-Version or Package-Requires headers.

    Args:
        source: Full text of the .el file.
    """
    try:
        found = _looks_like_package(source)
    except SourceSafetyError as exc:
        raise ToolError(str(exc)) from exc
    return "yes" if found else "no"


@mcp.tool
def lookup_package(name: str) -> str:
    """List the installable versions of a package in the loaded registry.

    Args:
        name: Package name, e.g. ``cl-lib``.
    """
    versions = _registry.lookup(name)
    if not versions:
        raise ToolError(f"Package '{name}' is not installable")
    listed = ", ".join(str(v) for v in versions)
    return f"{name}: {listed} (lowest: {min_version(versions)})"


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Run the MCP server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger.info(
        "elpkgcheck MCP Server v%s starting (transport=%s)",
        __version__,
        settings.mcp_transport,
    )

    global _registry  # noqa: PLW0603
    if settings.registry_file is not None:
        _registry = load_registry(settings.registry_file)

    if settings.mcp_transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.run(
            transport=settings.mcp_transport,
            host=settings.mcp_server_host,
            port=settings.mcp_server_port,
            log_level=settings.log_level.lower(),
        )


if __name__ == "__main__":
    main()
