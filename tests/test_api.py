"""Tests for API endpoints."""
import sqlite3
import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient
from sales_api import main
from sales_api.errors import SeedFetchError
from sales_api.main import app

client = TestClient(app)


def test_root_endpoint():
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_init_seeds_database(store, march_transactions):
    """Test /api/init replaces the collection with fetched records."""
    with patch.object(main.seed_loader, "fetch", AsyncMock(return_value=march_transactions)):
        response = client.get("/api/init")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "3" in response.text
    assert store.count_all() == 3


def test_init_fetch_failure(store):
    """Test seed fetch failures surface as 502 without the cause."""
    failing = AsyncMock(side_effect=SeedFetchError("Failed to fetch seed data from somewhere"))
    with patch.object(main.seed_loader, "fetch", failing):
        response = client.get("/api/init")

    assert response.status_code == 502
    assert response.json() == {"detail": "Failed to fetch seed data"}


def test_list_transactions(seeded_store):
    """Test listing with default pagination."""
    response = client.get("/api/transactions", params={"month": "March"})

    assert response.status_code == 200
    data = response.json()
    assert data["totalPages"] == 1
    assert [tx["id"] for tx in data["transactions"]] == [1, 2, 3]
    first = data["transactions"][0]
    assert set(first) >= {"title", "description", "price", "category", "sold", "dateOfSale"}


def test_list_transactions_search_and_paging(seeded_store):
    """Test search and perPage query parameters."""
    response = client.get(
        "/api/transactions",
        params={"month": "march", "search": "BACKPACK", "page": 1, "perPage": 1},
    )

    assert response.status_code == 200
    data = response.json()
    assert [tx["id"] for tx in data["transactions"]] == [3]
    assert data["totalPages"] == 1

    response = client.get("/api/transactions", params={"month": "March", "page": 2, "perPage": 2})
    assert [tx["id"] for tx in response.json()["transactions"]] == [3]
    assert response.json()["totalPages"] == 2


def test_list_transactions_search_by_price(seeded_store):
    response = client.get("/api/transactions", params={"month": "March", "search": "150"})
    assert [tx["id"] for tx in response.json()["transactions"]] == [2]


@pytest.mark.parametrize("params", [
    {},
    {"month": "March", "page": 0},
    {"month": "March", "perPage": 0},
    {"month": "March", "page": 1000000000000000000},
    {"month": "March", "perPage": 1000000000000000000},
])
def test_list_transactions_validation(seeded_store, params):
    response = client.get("/api/transactions", params=params)
    assert response.status_code == 422


def test_statistics(seeded_store):
    response = client.get("/api/statistics", params={"month": "March"})

    assert response.status_code == 200
    assert response.json() == {
        "totalSaleAmount": 1199,
        "totalSoldItems": 2,
        "totalUnsoldItems": 1,
    }


def test_statistics_empty_month(seeded_store):
    response = client.get("/api/statistics", params={"month": "August"})

    assert response.status_code == 200
    assert response.json()["totalSaleAmount"] == 0


def test_bar_chart(seeded_store):
    response = client.get("/api/barchart", params={"month": "March"})

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 10
    assert data[0] == {"range": "0-100", "count": 1}
    assert data[1] == {"range": "101-200", "count": 1}
    assert data[-1] == {"range": "901-above", "count": 1}
    assert all(entry["count"] == 0 for entry in data[2:-1])


def test_pie_chart(seeded_store):
    response = client.get("/api/piechart", params={"month": "March"})

    assert response.status_code == 200
    assert response.json() == [{"_id": "A", "count": 2}, {"_id": "B", "count": 1}]


def test_combined(seeded_store):
    """Test combined equals the four individual endpoints."""
    response = client.get("/api/combined", params={"month": "March"})

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"transactions", "statistics", "barChart", "pieChart"}
    assert data["transactions"] == client.get("/api/transactions", params={"month": "March"}).json()
    assert data["statistics"] == client.get("/api/statistics", params={"month": "March"}).json()
    assert data["barChart"] == client.get("/api/barchart", params={"month": "March"}).json()
    assert data["pieChart"] == client.get("/api/piechart", params={"month": "March"}).json()


@pytest.mark.parametrize("path", [
    "/api/transactions",
    "/api/statistics",
    "/api/barchart",
    "/api/piechart",
    "/api/combined",
])
def test_invalid_month(seeded_store, path):
    response = client.get(path, params={"month": "Smarch"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid month: Smarch"}


def test_store_failure_is_500(seeded_store):
    """Test store errors are reported generically."""
    with patch.object(seeded_store, "sum_price", side_effect=sqlite3.OperationalError("disk I/O error")):
        response = client.get("/api/statistics", params={"month": "March"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_list_transactions_search_is_trimmed(seeded_store):
    """Test surrounding spaces are ignored for text and price matches."""
    response = client.get("/api/transactions", params={"month": "March", "search": " backpack "})
    assert [tx["id"] for tx in response.json()["transactions"]] == [3]

    response = client.get("/api/transactions", params={"month": "March", "search": " 150 "})
    assert [tx["id"] for tx in response.json()["transactions"]] == [2]
