import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_reference_models(client: AsyncClient):
    """Public catalogue of the six FEAF models"""
    response = await client.get("/api/v1/reference-models")

    assert response.status_code == 200
    data = response.json()
    assert [m["id"] for m in data] == ["PRM", "BRM", "DRM", "ARM", "IRM", "SRM"]
    prm = data[0]
    assert prm["name"] == "Performance Reference Model"
    assert prm["shortName"] == "PRM"
    assert prm["componentTypes"] == ["KPI", "METRIC", "MEASUREMENT_CATEGORY"]
    assert prm["icon"]


@pytest.mark.asyncio
async def test_get_reference_model(client: AsyncClient):
    response = await client.get("/api/v1/reference-models/SRM")

    assert response.status_code == 200
    assert response.json()["componentTypes"] == ["SECURITY_CONTROL", "POLICY", "RISK_ELEMENT"]


@pytest.mark.asyncio
async def test_get_unknown_reference_model(client: AsyncClient):
    response = await client.get("/api/v1/reference-models/XRM")

    assert response.status_code == 404
    assert response.json()["detail"] == "Reference model with ID XRM not found"
