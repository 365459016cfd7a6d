"""Unit tests for administrative hierarchy endpoints."""

import uuid
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from civiclens_api.api.v1.hierarchy import hierarchy_router
from civiclens_api.core.dependencies import get_async_session
from civiclens_api.lib.hierarchy import AdministrativeTier, AdministrativeUnit

_SERVICE = "civiclens_api.services.hierarchy_service"


@pytest.fixture
def client() -> AsyncClient:
    app = FastAPI()
    app.include_router(hierarchy_router, prefix="/api/v1")
    app.dependency_overrides[get_async_session] = lambda: AsyncMock()
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestListing:
    @pytest.mark.asyncio
    async def test_regions(self, client: AsyncClient) -> None:
        region = AdministrativeUnit(uuid.uuid4(), "Nairobi", AdministrativeTier.REGION)
        with patch(f"{_SERVICE}.list_regions", new_callable=AsyncMock, return_value=[region]):
            resp = await client.get("/api/v1/regions")
        assert resp.status_code == 200
        assert resp.json() == [{"id": str(region.id), "name": "Nairobi", "tier": "region", "parent_id": None}]

    @pytest.mark.asyncio
    async def test_sub_regions_queried_with_region_tier(self, client: AsyncClient) -> None:
        region_id = uuid.uuid4()
        with patch(f"{_SERVICE}.children_of", new_callable=AsyncMock, return_value=[]) as mock_children:
            resp = await client.get(f"/api/v1/regions/{region_id}/sub-regions")
        assert resp.status_code == 200
        assert resp.json() == []
        assert mock_children.call_args.args[1:] == (region_id, AdministrativeTier.REGION)

    @pytest.mark.asyncio
    async def test_local_units_queried_with_sub_region_tier(self, client: AsyncClient) -> None:
        sub_region_id = uuid.uuid4()
        with patch(f"{_SERVICE}.children_of", new_callable=AsyncMock, return_value=[]) as mock_children:
            await client.get(f"/api/v1/sub-regions/{sub_region_id}/local-units")
        assert mock_children.call_args.args[1:] == (sub_region_id, AdministrativeTier.SUB_REGION)

    @pytest.mark.asyncio
    async def test_service_failure_is_500(self, client: AsyncClient) -> None:
        with patch(f"{_SERVICE}.list_regions", new_callable=AsyncMock, side_effect=RuntimeError("db down")):
            resp = await client.get("/api/v1/regions")
        assert resp.status_code == 500


class TestValidate:
    @pytest.mark.asyncio
    async def test_validate_path(self, client: AsyncClient) -> None:
        with patch(f"{_SERVICE}.validate_path", new_callable=AsyncMock, return_value=False):
            resp = await client.post(
                "/api/v1/hierarchy/validate",
                json={"region_id": str(uuid.uuid4()), "sub_region_id": str(uuid.uuid4())},
            )
        assert resp.status_code == 200
        assert resp.json() == {"valid": False}
