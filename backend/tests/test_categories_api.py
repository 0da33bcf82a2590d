import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_list_categories(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/categories/", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 23
    assert data["items"][0] == {"name": "Food", "icon": "🍔", "color": "orange-500"}
    assert data["items"][-1]["name"] == "Other"


@pytest.mark.asyncio
async def test_list_categories_requires_authentication(client: AsyncClient):
    response = await client.get("/api/categories/")
    assert response.status_code in (401, 403)
