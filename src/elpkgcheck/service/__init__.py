"""Service layer shared by the REST API and the MCP server."""

from elpkgcheck.service.analysis import looks_like_package, run_analysis

__all__ = ["looks_like_package", "run_analysis"]
