"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from elpkgcheck.models.diagnostics import AnalysisStatus, Diagnostic


class AnalyzeRequest(BaseModel):
    """Request body for POST /analyze and POST /analyze/looks-like-package."""

    source: str = Field(description="Full text of one Emacs Lisp source file")


class AnalyzeResponse(BaseModel):
    """Response body for POST /analyze."""

    status: AnalysisStatus
    diagnostics: list[Diagnostic] = []
    message: str | None = None


class LooksLikePackageResponse(BaseModel):
    """Response body for POST /analyze/looks-like-package."""

    looks_like_package: bool


class PackageVersionsResponse(BaseModel):
    """Response for GET /registry/{name}."""

    name: str
    versions: list[str]
    lowest: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = ""
