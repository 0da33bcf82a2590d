"""
API tests for the expenses endpoints.
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_expense(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/expenses/",
        json={"name": "Lunch", "price": "12.50", "category": "Dining Out", "date": "2026-10-19T12:00:00Z"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["id"] > 0
    assert data["name"] == "Lunch"
    assert Decimal(data["price"]) == Decimal("12.50")
    assert data["category"] == "Dining Out"
    assert data["date"].startswith("2026-10-19T12:00:00")


@pytest.mark.asyncio
async def test_create_expense_defaults(client: AsyncClient, auth_headers: dict):
    """Category defaults to Food and the date to the current time."""
    response = await client.post("/api/expenses/", json={"name": "Snack", "price": 3}, headers=auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["category"] == "Food"
    assert data["date"].startswith("2026-10-19T15:05:00")


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "price": "1.00"},
        {"name": "Taxi", "price": "-1"},
        {"name": "Taxi", "price": "1.234"},
        {"name": "Taxi", "price": "abc"},
        {"name": "Taxi", "price": "1.00", "category": "Crypto"},
        {"price": "1.00"},
    ],
)
@pytest.mark.asyncio
async def test_create_expense_validation(client: AsyncClient, auth_headers: dict, payload: dict):
    response = await client.post("/api/expenses/", json=payload, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient):
    response = await client.get("/api/expenses/")
    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_rejects_refresh_token(client: AsyncClient, user, token_for):
    headers = {"Authorization": f"Bearer {token_for(user.id, token_type='refresh')}"}

    response = await client.get("/api/expenses/", headers=headers)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_rejects_unknown_user(client: AsyncClient, user, token_for):
    headers = {"Authorization": f"Bearer {token_for(user.id + 100)}"}

    response = await client.get("/api/expenses/", headers=headers)

    assert response.status_code == 401
    assert response.json()["detail"] == "User not found"


@pytest.mark.asyncio
async def test_get_expense(client: AsyncClient, auth_headers: dict, user, add_expense):
    expense = await add_expense(user, "Bus ticket", "2.80", "Transport", datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc))

    response = await client.get(f"/api/expenses/{expense.id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "Bus ticket"


@pytest.mark.asyncio
async def test_get_missing_expense(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/expenses/9999", headers=auth_headers)

    assert response.status_code == 404
    assert "9999" in response.json()["detail"]


@pytest.mark.asyncio
async def test_foreign_expense_is_forbidden(client: AsyncClient, auth_headers: dict, other_user, add_expense):
    expense = await add_expense(other_user, "Cinema", "30.00", "Entertainment", datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc))

    assert (await client.get(f"/api/expenses/{expense.id}", headers=auth_headers)).status_code == 403
    assert (await client.delete(f"/api/expenses/{expense.id}", headers=auth_headers)).status_code == 403
    replace = await client.put(
        f"/api/expenses/{expense.id}",
        json={"name": "Mine now", "price": "1.00", "category": "Other"},
        headers=auth_headers,
    )
    assert replace.status_code == 403


@pytest.mark.asyncio
async def test_replace_expense(client: AsyncClient, auth_headers: dict, user, add_expense):
    expense = await add_expense(user, "Groceries", "40.00", "Groceries", datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc))

    response = await client.put(
        f"/api/expenses/{expense.id}",
        json={"name": "Weekly groceries", "price": "42.10", "category": "Groceries", "date": "2026-10-17T10:00:00Z"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == expense.id
    assert data["name"] == "Weekly groceries"
    assert Decimal(data["price"]) == Decimal("42.10")
    assert data["date"].startswith("2026-10-17T10:00:00")


@pytest.mark.asyncio
async def test_delete_expense(client: AsyncClient, auth_headers: dict, user, add_expense):
    expense = await add_expense(user, "Coffee", "4.00", "Food", datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))

    response = await client.delete(f"/api/expenses/{expense.id}", headers=auth_headers)
    assert response.status_code == 204

    response = await client.get(f"/api/expenses/{expense.id}", headers=auth_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_expenses_of_current_month(client: AsyncClient, auth_headers: dict, user, other_user, add_expense):
    await add_expense(user, "Old", "10.00", "Food", datetime(2026, 9, 30, 23, 0, tzinfo=timezone.utc))
    await add_expense(user, "Early", "5.00", "Food", datetime(2026, 10, 2, 9, 0, tzinfo=timezone.utc))
    await add_expense(user, "Latest", "7.50", "Bills", datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))
    await add_expense(user, "Undated", "1.00", "Food")
    await add_expense(other_user, "Not mine", "99.00", "Food", datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))

    response = await client.get("/api/expenses/", headers=auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["period_label"] == "October 2026"
    assert [item["name"] for item in data["items"]] == ["Latest", "Early"]
    assert data["total"] == 2
    assert Decimal(data["total_amount"]) == Decimal("12.50")


@pytest.mark.asyncio
async def test_list_expenses_by_period_and_category(client: AsyncClient, auth_headers: dict, user, add_expense):
    await add_expense(user, "Dinner", "20.00", "Food", datetime(2026, 10, 12, 19, 0, tzinfo=timezone.utc))
    await add_expense(user, "Power", "60.00", "Bills", datetime(2026, 10, 13, 8, 0, tzinfo=timezone.utc))
    await add_expense(user, "Today", "3.00", "Food", datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc))

    response = await client.get(
        "/api/expenses/",
        params={"period": "last_week", "category": "Food"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["period_label"] == "Oct 11 - Oct 17"
    assert [item["name"] for item in data["items"]] == ["Dinner"]


@pytest.mark.asyncio
async def test_list_expenses_invalid_custom_range(client: AsyncClient, auth_headers: dict):
    response = await client.get(
        "/api/expenses/",
        params={"period": "custom", "start": "2024-03-10", "end": "2024-03-05"},
        headers=auth_headers,
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_stored_category_is_returned_as_is(client: AsyncClient, auth_headers: dict, user, add_expense):
    """Names outside the category set are kept in the response; reports count them as Other."""
    expense = await add_expense(user, "Token", "5.00", "Crypto", datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc))

    response = await client.get(f"/api/expenses/{expense.id}", headers=auth_headers)
    assert response.json()["category"] == "Crypto"

    report = (await client.get("/api/reports/dashboard", headers=auth_headers)).json()
    assert report["category_breakdown"][0]["category"] == "Other"
