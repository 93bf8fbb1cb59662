"""REST API for elpkgcheck."""
