"""Registry lookup endpoint: GET /registry/{name}."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from elpkgcheck.api.deps import get_registry
from elpkgcheck.api.schemas import PackageVersionsResponse
from elpkgcheck.models.version import min_version
from elpkgcheck.registry.base import PackageRegistry

router = APIRouter()


@router.get("/{name}", response_model=PackageVersionsResponse)
async def get_package_versions(
    name: str,
    registry: PackageRegistry = Depends(get_registry),  # noqa: B008
) -> PackageVersionsResponse:
    """List the installable versions of one package."""
    versions = registry.lookup(name)
    if not versions:
        raise HTTPException(status_code=404, detail=f"Package '{name}' is not installable")
    return PackageVersionsResponse(
        name=name,
        versions=[str(v) for v in versions],
        lowest=str(min_version(versions)),
    )
