"""Diagnostic records reported back to the host checker."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel

CHECKER_NAME = "emacs-lisp-package"


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"


class AnalysisStatus(StrEnum):
    """Outcome of one analysis run."""

    FINISHED = "finished"
    SKIPPED = "skipped"
    ERRORED = "errored"


class Diagnostic(BaseModel):
    """A single located finding. Lines and columns are 1-based."""

    line: int
    column: int
    severity: Severity
    message: str
    checker: str = CHECKER_NAME


class AnalysisResult(BaseModel):
    """Diagnostics for one file, or the reason none could be produced."""

    status: AnalysisStatus
    diagnostics: list[Diagnostic] = []
    message: str | None = None

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]
