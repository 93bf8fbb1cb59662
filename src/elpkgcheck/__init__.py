"""elpkgcheck: validate Emacs Lisp package header metadata."""

from elpkgcheck.service.analysis import looks_like_package, run_analysis

__version__ = "0.1.0"

__all__ = ["__version__", "looks_like_package", "run_analysis"]
