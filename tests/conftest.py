"""Shared test fixtures for elpkgcheck."""

from __future__ import annotations

import pytest

from elpkgcheck.checker.engine import PackageChecker
from elpkgcheck.registry.base import InMemoryRegistry

SAMPLE_PACKAGE = """\
;;; foo.el --- Frobnicate the widgets  -*- lexical-binding: t -*-

;; Copyright (C) 2016 Jane Doe

;; Author: Jane Doe <jane@example.com>
;; Version: 0.1
;; Package-Requires: ((emacs "24.1") (cl-lib "0.5"))
;; Keywords: convenience

;;; Commentary:

;; Frobs widgets.

;;; Code:

(defun foo-frob ()
  "Frob a widget."
  nil)

(provide 'foo)
;;; foo.el ends here
"""

REGISTRY_YAML = """\
# Snapshot of installable package versions
packages:
  cl-lib: ["0.5", "0.6.1"]
  dash:
    - "2.10.0"
    - "2.12.0"
  s: "1.10.0"
"""


def make_package(
    *,
    summary: str = "Frobnicate the widgets",
    cookie: str = "",
    version: str | None = "0.1",
    requires: str | None = '((emacs "24.1") (cl-lib "0.5"))',
    trailer: str = "",
) -> str:
    """Build a single-file package; pass ``None`` to omit a header."""
    lines = [f";;; foo.el --- {summary}{cookie}", "", ";; Author: Jane Doe <jane@example.com>"]
    if version is not None:
        lines.append(f";; Version: {version}")
    if requires is not None:
        lines.append(f";; Package-Requires: {requires}")
    lines += ["", ";;; Code:", "", "(provide 'foo)"]
    if trailer:
        lines.append(trailer.rstrip("\n"))
    lines.append(";;; foo.el ends here")
    return "\n".join(lines) + "\n"


@pytest.fixture
def registry() -> InMemoryRegistry:
    return InMemoryRegistry(
        {
            "cl-lib": ["0.5", "1.0"],
            "dash": ["2.10.0", "2.12.0"],
            "foo": ["0", "19000101.1", "19010101.1"],
            "a": ["1"],
            "b": ["1"],
        }
    )


@pytest.fixture
def checker(registry: InMemoryRegistry) -> PackageChecker:
    return PackageChecker(registry=registry)
