"""Integration tests for the FastAPI REST API."""

from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from elpkgcheck.api.app import create_app
from elpkgcheck.api.deps import init_registry, reset_registry
from elpkgcheck.registry.base import InMemoryRegistry
from elpkgcheck.settings import Settings
from tests.conftest import REGISTRY_YAML, SAMPLE_PACKAGE, make_package


@pytest.fixture
def app(registry: InMemoryRegistry):
    app = create_app(settings=Settings())
    # Manually init the registry (ASGITransport doesn't trigger lifespan)
    init_registry(registry)
    yield app
    reset_registry()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class TestHealthEndpoint:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data
        assert "X-Request-Duration-Ms" in response.headers


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


class TestAnalyzeEndpoint:
    async def test_clean_package(self, client: AsyncClient) -> None:
        response = await client.post("/analyze", json={"source": SAMPLE_PACKAGE})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "finished"
        assert data["diagnostics"] == []

    async def test_diagnostics(self, client: AsyncClient) -> None:
        source = make_package(requires='((a "1") (b "1")) (c "1")')
        response = await client.post("/analyze", json={"source": source})
        assert response.status_code == 200
        diags = response.json()["diagnostics"]
        assert diags == [
            {
                "line": 5,
                "column": 1,
                "severity": "error",
                "message": "More than one expression provided.",
                "checker": "emacs-lisp-package",
            }
        ]

    async def test_skipped(self, client: AsyncClient) -> None:
        response = await client.post("/analyze", json={"source": "(setq x 1)\n"})
        assert response.json()["status"] == "skipped"

    async def test_missing_source(self, client: AsyncClient) -> None:
        response = await client.post("/analyze", json={})
        assert response.status_code == 422

    async def test_looks_like_package(self, client: AsyncClient) -> None:
        response = await client.post(
            "/analyze/looks-like-package", json={"source": SAMPLE_PACKAGE}
        )
        assert response.status_code == 200
        assert response.json() == {"looks_like_package": True}

    async def test_body_too_large(self, client: AsyncClient) -> None:
        response = await client.post(
            "/analyze",
            content=b"x" * (10 * 1024 * 1024 + 1),
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 413


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistryEndpoint:
    async def test_known_package(self, client: AsyncClient) -> None:
        response = await client.get("/registry/dash")
        assert response.status_code == 200
        assert response.json() == {
            "name": "dash",
            "versions": ["2.10.0", "2.12.0"],
            "lowest": "2.10.0",
        }

    async def test_unknown_package(self, client: AsyncClient) -> None:
        response = await client.get("/registry/nope")
        assert response.status_code == 404


class TestLifespan:
    async def test_registry_file_loaded_at_startup(self, tmp_path: Path) -> None:
        path = tmp_path / "archive.yaml"
        path.write_text(REGISTRY_YAML, encoding="utf-8")
        reset_registry()
        app = create_app(settings=Settings(registry_file=path))
        async with app.router.lifespan_context(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                response = await c.get("/registry/cl-lib")
        assert response.status_code == 200
        assert response.json()["versions"] == ["0.5", "0.6.1"]
