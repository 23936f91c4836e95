from fastapi.testclient import TestClient

import httpx

from api.app.config import Settings
from api.app.main import app
from api.app.routers import records as records_router
from deskcore.clients import admin_api
from deskcore.clients.admin_api import AdminApiError


client = TestClient(app)

RAW_ORDERS = [
    {"id": 1, "store_order": {"store": {"name": "Acme, Inc."}, "status": "Delivered"}, "created_at": "2000-01-01"},
    {"id": 2, "store": {"name": "Bolt"}, "status": "pending", "created_at": "garbage"},
    {"id": 3, "store_name": "Corner", "payment_status": "paid"},
]


def test_normalize_endpoint_returns_canonical_records():
    r = client.post("/records/orders/normalize", json=RAW_ORDERS)
    assert r.status_code == 200
    data = r.json()
    assert [row["id"] for row in data] == ["1", "2", "3"]
    assert data[0]["store_name"] == "Acme, Inc."
    assert data[0]["status_tag"] == "delivered"
    assert data[2]["status_tag"] == "placed"


def test_normalize_endpoint_filters_by_tab_and_search():
    r = client.post("/records/orders/normalize", params={"tab": "Delivered"}, json=RAW_ORDERS)
    assert [row["id"] for row in r.json()] == ["1"]

    r = client.post("/records/orders/normalize", params={"q": "bolt"}, json=RAW_ORDERS)
    assert [row["id"] for row in r.json()] == ["2"]


def test_normalize_endpoint_period_drops_undated_records():
    r = client.post("/records/orders/normalize", params={"period": "Last Year"}, json=RAW_ORDERS)
    assert r.json() == []


def test_unknown_domain_is_404():
    r = client.post("/records/payouts/normalize", json=[])
    assert r.status_code == 404


def test_export_endpoint_returns_csv():
    r = client.post("/records/orders/export", json=RAW_ORDERS[:1])
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "attachment" in r.headers["content-disposition"]
    lines = r.text.splitlines()
    assert lines[0].startswith("Order ID,Order No")
    assert '"Acme, Inc."' in lines[1]


def test_list_endpoint_maps_upstream_failure_to_502(monkeypatch):
    async def boom(*args, **kwargs):
        raise AdminApiError("admin api returned 500 for orders", status_code=500)

    monkeypatch.setattr(records_router, "fetch_records", boom)
    r = client.get("/records/orders")
    assert r.status_code == 502


def test_list_endpoint_normalizes_fetched_rows(monkeypatch):
    async def fake_fetch(domain, **kwargs):
        return [{"id": 5, "status": "On Hold", "user": {"name": "Chidi"}}]

    monkeypatch.setattr(records_router, "fetch_records", fake_fetch)
    r = client.get("/records/disputes", params={"tab": "On Hold"})
    assert r.status_code == 200
    assert r.json()[0]["status_key"] == "on_hold"


def test_meta_endpoints():
    assert client.get("/meta/periods").json() == [
        "Today",
        "This Week",
        "Last Month",
        "Last 6 Months",
        "Last Year",
        "All time",
    ]
    assert client.get("/meta/disputes/tabs").json() == ["All", "Pending", "On Hold", "Resolved"]
    assert client.get("/meta/nope/tabs").status_code == 404


def test_list_endpoint_uses_settings_for_admin_api(monkeypatch):
    configured = Settings(
        _env_file=None,
        admin_api_url="https://admin.example.test/api/",
        admin_api_token="from-settings",
        admin_api_timeout=5,
    )
    monkeypatch.setattr(records_router, "settings", configured)
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": [{"id": 7, "status": "delivered", "created_at": "2024-03-10"}]})

    async def fetch_with_mock_transport(domain, **kwargs):
        seen["timeout"] = kwargs["timeout"]
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as mock_client:
            return await admin_api.fetch_records(domain, client=mock_client, **kwargs)

    monkeypatch.setattr(records_router, "fetch_records", fetch_with_mock_transport)
    r = client.get("/records/orders", params={"date_from": "2024-03-01", "date_to": "2024-03-31"})

    assert r.status_code == 200
    assert [row["id"] for row in r.json()] == ["7"]
    assert seen["url"].host == "admin.example.test"
    assert seen["url"].params["date_from"] == "2024-03-01"
    assert seen["url"].params["date_to"] == "2024-03-31"
    assert seen["auth"] == "Bearer from-settings"
    assert seen["timeout"] == 5


def test_normalize_endpoint_custom_date_range():
    raws = [
        {"id": 1, "created_at": "2024-03-10"},
        {"id": 2, "created_at": "2024-04-02"},
        {"id": 3},
    ]
    r = client.post(
        "/records/orders/normalize",
        params={"date_from": "2024-03-01", "date_to": "2024-03-31"},
        json=raws,
    )
    assert [row["id"] for row in r.json()] == ["1"]
