"""Tests for /store-transactions and /transactions."""

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from apps.api.core.config import Settings
from apps.api.main import create_app

SAMPLE = [
    {"amount": "1,500.00", "date": "15-01-2024 14:30:00", "vpa": "merchant@upi", "reference": "123456789012"},
    {"amount": "250", "date": "16-01-2024 09:00:00", "vpa": "shop@okaxis", "reference": "N/A"},
]


@pytest.fixture
def app():
    return create_app(Settings(_env_file=None))


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def api_key(client):
    return client.post("/generate-key", json={"name": "test"}).json()["apiKey"]


@pytest.fixture
def headers(api_key):
    return {"X-API-Key": api_key}


def test_fetch_before_push_is_empty(client, headers, api_key):
    response = client.get("/transactions", headers=headers)
    assert response.status_code == 200

    data = response.json()
    assert data["transactions"] == []
    assert data["user"]["apiKey"] == api_key
    assert data["user"]["totalTransactions"] == 0
    assert data["user"]["keyCreated"].endswith("Z")
    assert data["user"]["lastUpdated"]
    assert data["metadata"]["source"] == "SMS_BANK_READER"
    assert data["metadata"]["version"] == "1.0.0"
    assert data["metadata"]["generatedAt"]


def test_push_then_fetch_round_trip(client, headers, api_key):
    response = client.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Transactions stored successfully",
        "storedCount": 2,
        "apiKey": api_key,
    }

    data = client.get("/transactions", headers=headers).json()
    assert data["user"]["totalTransactions"] == 2
    assert data["transactions"] == [
        {
            "id": 1,
            "amount": 1500.0,
            "currency": "INR",
            "date": "15-01-2024 14:30:00",
            "vpa": "merchant@upi",
            "reference": "123456789012",
            "type": "debit",
            "category": "bank_transfer",
            "status": "completed",
        },
        {
            "id": 2,
            "amount": 250.0,
            "currency": "INR",
            "date": "16-01-2024 09:00:00",
            "vpa": "shop@okaxis",
            "reference": "N/A",
            "type": "debit",
            "category": "bank_transfer",
            "status": "completed",
        },
    ]


def test_second_push_replaces_first(client, headers):
    client.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)
    replacement = [{"amount": "99", "date": "20-01-2024 10:00:00", "vpa": "new@upi"}]
    response = client.post("/store-transactions", json={"transactions": replacement}, headers=headers)
    assert response.json()["storedCount"] == 1

    transactions = client.get("/transactions", headers=headers).json()["transactions"]
    assert [t["vpa"] for t in transactions] == ["new@upi"]


def test_push_empty_list_clears(client, headers):
    client.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)
    response = client.post("/store-transactions", json={"transactions": []}, headers=headers)

    assert response.json()["storedCount"] == 0
    assert client.get("/transactions", headers=headers).json()["transactions"] == []


def test_client_shaped_records_are_honoured(client, headers):
    shaped = [
        {
            "id": 7,
            "amount": 12.5,
            "currency": "USD",
            "date": "01-01-2024 10:00:00",
            "vpa": "x@upi",
            "ref": "987654321",
            "type": "credit",
            "category": "refund",
            "status": "pending",
            "extra": "ignored",
        }
    ]
    client.post("/store-transactions", json={"transactions": shaped}, headers=headers)

    stored = client.get("/transactions", headers=headers).json()["transactions"][0]
    assert stored == {
        "id": 7,
        "amount": 12.5,
        "currency": "USD",
        "date": "01-01-2024 10:00:00",
        "vpa": "x@upi",
        "reference": "987654321",
        "type": "credit",
        "category": "refund",
        "status": "pending",
    }


def test_unparsable_amount_degrades_to_zero(client, headers):
    records = [{"amount": "not-a-number", "date": "01-01-2024 10:00:00", "vpa": "x@upi"}]
    response = client.post("/store-transactions", json={"transactions": records}, headers=headers)

    assert response.status_code == 200
    stored = client.get("/transactions", headers=headers).json()["transactions"][0]
    assert stored["amount"] == 0.0


def test_overflowing_amount_is_stored_as_zero(client, headers):
    records = [{"amount": "9" * 400, "date": "01-01-2024 10:00:00", "vpa": "x@upi"}]
    response = client.post("/store-transactions", json={"transactions": records}, headers=headers)

    assert response.status_code == 200
    stored = client.get("/transactions", headers=headers).json()["transactions"][0]
    assert stored["amount"] == 0.0


@pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_json_amount_is_stored_as_zero(client, headers, literal):
    content = (
        '{"transactions": [{"amount": ' + literal
        + ', "date": "01-01-2024 10:00:00", "vpa": "x@upi"}]}'
    )
    response = client.post(
        "/store-transactions",
        content=content,
        headers={**headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 200
    stored = client.get("/transactions", headers=headers).json()["transactions"][0]
    assert stored["amount"] == 0.0


@pytest.mark.parametrize(
    "body",
    [
        {"transactions": "not-a-list"},
        {"transactions": {"amount": "10"}},
        {"transactions": None},
        {},
    ],
)
def test_non_list_transactions_is_400(client, headers, body):
    response = client.post("/store-transactions", json=body, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid data format"


def test_rejected_push_keeps_previous_set(client, headers):
    client.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)
    client.post("/store-transactions", json={"transactions": "oops"}, headers=headers)

    assert client.get("/transactions", headers=headers).json()["user"]["totalTransactions"] == 2


def test_missing_key_is_401(client):
    response = client.get("/transactions")
    assert response.status_code == 401
    assert response.json() == {
        "error": "API key is required",
        "message": "Please include X-API-Key header in your request",
    }


def test_auth_checked_before_body(client):
    response = client.post("/store-transactions", json={"transactions": "oops"})
    assert response.status_code == 401


def test_undecodable_body_is_rejected_before_auth(client):
    # The body is decoded before dependencies run, so no key still gives 400
    response = client.post(
        "/store-transactions",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert set(response.json()) == {"error", "message"}


@pytest.mark.parametrize("bad_key", ["", "invalid-key", "A" * 32])
def test_unknown_keys_share_one_shape(client, bad_key):
    response = client.get("/transactions", headers={"X-API-Key": bad_key})
    assert response.status_code == 401
    assert set(response.json()) == {"error", "message"}


def test_deleted_key_looks_like_never_issued(client, headers, api_key):
    client.delete(f"/admin/keys/{api_key}")

    deleted = client.get("/transactions", headers=headers)
    never = client.get("/transactions", headers={"X-API-Key": "never-issued"})
    assert deleted.status_code == never.status_code == 401
    assert deleted.json() == never.json()


def test_inactive_key_still_authenticates(client, app, headers, api_key):
    app.state.registry.deactivate(api_key)
    assert client.get("/transactions", headers=headers).status_code == 200


def test_fetch_touches_last_used(client, headers, api_key):
    client.get("/transactions", headers=headers)
    keys = client.get("/admin/keys").json()["keys"]
    assert keys[0]["lastUsed"] is not None


def test_fetch_single_transaction(client, headers):
    client.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)

    response = client.get("/transactions/2", headers=headers)
    assert response.status_code == 200
    assert response.json()["transaction"]["vpa"] == "shop@okaxis"

    missing = client.get("/transactions/99", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "Transaction not found"


def test_keys_are_isolated(client, headers):
    other = {"X-API-Key": client.post("/generate-key", json={}).json()["apiKey"]}
    client.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)

    assert client.get("/transactions", headers=other).json()["transactions"] == []


def test_store_failure_is_generic_500(client, app, headers, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(app.state.store, "replace", boom)
    response = client.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)

    assert response.status_code == 500
    assert "disk on fire" not in response.text


@pytest.mark.asyncio
async def test_async_round_trip(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        api_key = (await ac.post("/generate-key", json={"name": "async"})).json()["apiKey"]
        headers = {"X-API-Key": api_key}

        stored = await ac.post("/store-transactions", json={"transactions": SAMPLE}, headers=headers)
        fetched = await ac.get("/transactions", headers=headers)

    assert stored.json()["storedCount"] == 2
    assert len(fetched.json()["transactions"]) == 2
