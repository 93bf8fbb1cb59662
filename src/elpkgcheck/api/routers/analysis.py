"""Analysis endpoints: POST /analyze, POST /analyze/looks-like-package."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from elpkgcheck.api.deps import get_registry
from elpkgcheck.api.schemas import AnalyzeRequest, AnalyzeResponse, LooksLikePackageResponse
from elpkgcheck.parser.source import SourceSafetyError
from elpkgcheck.registry.base import PackageRegistry
from elpkgcheck.service.analysis import looks_like_package, run_analysis

router = APIRouter()


@router.post("", response_model=AnalyzeResponse)
async def analyze(
    body: AnalyzeRequest,
    registry: PackageRegistry = Depends(get_registry),  # noqa: B008
) -> AnalyzeResponse:
    """Check the package headers of one source file."""
    result = run_analysis(body.source, registry=registry)
    return AnalyzeResponse(
        status=result.status,
        diagnostics=result.diagnostics,
        message=result.message,
    )


@router.post("/looks-like-package", response_model=LooksLikePackageResponse)
async def check_looks_like_package(body: AnalyzeRequest) -> LooksLikePackageResponse:
    """Report whether the source carries Package-Version or Package-Requires."""
    try:
        found = looks_like_package(body.source)
    except SourceSafetyError as exc:
        raise HTTPException(status_code=413, detail=str(exc)) from None
    return LooksLikePackageResponse(looks_like_package=found)
