"""MCP server for elpkgcheck."""
