"""
Tests for the group, contact, ledger, financial year and
auth API endpoints.
"""

from decimal import Decimal


# --- Groups ---

def test_create_and_list_groups(client):
    parent = client.post("/groups", json={"name": "Assets"})
    assert parent.status_code == 201

    child = client.post("/groups", json={
        "name": "Current Assets", "parent_group_id": parent.json()["id"],
    })
    assert child.status_code == 201
    assert child.json()["parent_group_id"] == parent.json()["id"]

    names = [g["name"] for g in client.get("/groups").json()]
    assert names == ["Assets", "Current Assets"]


def test_group_cycle_returns_400(client):
    a = client.post("/groups", json={"name": "A"}).json()
    b = client.post("/groups", json={"name": "B", "parent_group_id": a["id"]}).json()

    response = client.patch(f"/groups/{a['id']}", json={"parent_group_id": b["id"]})

    assert response.status_code == 400


def test_group_unknown_parent_returns_404(client):
    response = client.post("/groups", json={"name": "Orphan", "parent_group_id": 9999})
    assert response.status_code == 404


def test_search_groups(client):
    for name in ("Fixed Assets", "Current Assets", "Income"):
        client.post("/groups", json={"name": name})

    response = client.get("/groups/search", params={"query": "assets"})

    assert [g["name"] for g in response.json()] == ["Current Assets", "Fixed Assets"]


# --- Contacts ---

def test_contact_crud(client):
    created = client.post("/contacts", json={
        "name": "Acme Ltd", "contact_type": "customer", "email": "ar@acme.com",
    })
    assert created.status_code == 201
    contact_id = created.json()["id"]

    updated = client.patch(f"/contacts/{contact_id}", json={"contact_type": "both"})
    assert updated.json()["contact_type"] == "both"

    assert client.delete(f"/contacts/{contact_id}").json() == {"success": True}
    assert client.get(f"/contacts/{contact_id}").status_code == 404


def test_contact_bad_email_returns_422(client):
    response = client.post("/contacts", json={
        "name": "Acme Ltd", "contact_type": "customer", "email": "acme",
    })
    assert response.status_code == 422


# --- Ledgers ---

def test_create_ledger(client):
    group = client.post("/groups", json={"name": "Cash-in-hand"}).json()

    response = client.post("/ledgers", json={
        "name": "Cash",
        "group_id": group["id"],
        "opening_balance": "2500.50",
        "opening_balance_type": "debit",
    })

    assert response.status_code == 201
    data = response.json()
    assert Decimal(data["opening_balance"]) == Decimal("2500.50")
    assert data["opening_balance_type"] == "debit"


def test_create_ledger_unknown_group_returns_404(client):
    response = client.post("/ledgers", json={"name": "Cash", "group_id": 9999})
    assert response.status_code == 404


def test_create_ledger_negative_opening_returns_422(client):
    group = client.post("/groups", json={"name": "Cash-in-hand"}).json()

    response = client.post("/ledgers", json={
        "name": "Cash", "group_id": group["id"], "opening_balance": "-1.00",
    })

    assert response.status_code == 422


def test_update_and_delete_ledger(client):
    group = client.post("/groups", json={"name": "Cash-in-hand"}).json()
    ledger = client.post("/ledgers", json={"name": "Cash", "group_id": group["id"]}).json()

    updated = client.patch(f"/ledgers/{ledger['id']}", json={"name": "Petty Cash"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Petty Cash"

    assert client.delete(f"/ledgers/{ledger['id']}").status_code == 200
    assert client.get(f"/ledgers/{ledger['id']}").status_code == 404


def test_delete_group_in_use_returns_400(client):
    group = client.post("/groups", json={"name": "Cash-in-hand"}).json()
    client.post("/ledgers", json={"name": "Cash", "group_id": group["id"]})

    assert client.delete(f"/groups/{group['id']}").status_code == 400


# --- Financial years ---

def test_financial_year_activation(client):
    first = client.post("/financial-years", json={
        "name": "FY 2023-24",
        "start_date": "2023-04-01",
        "end_date": "2024-03-31",
        "is_active": True,
    }).json()
    second = client.post("/financial-years", json={
        "name": "FY 2024-25", "start_date": "2024-04-01", "end_date": "2025-03-31",
    }).json()
    assert client.get("/financial-years/active").json()["id"] == first["id"]

    response = client.post(f"/financial-years/{second['id']}/activate")

    assert response.status_code == 200
    active = [y["id"] for y in client.get("/financial-years").json() if y["is_active"]]
    assert active == [second["id"]]


def test_no_active_financial_year(client):
    response = client.get("/financial-years/active")
    assert response.status_code == 200
    assert response.json() is None


def test_financial_year_backwards_dates_returns_422(client):
    response = client.post("/financial-years", json={
        "name": "Backwards", "start_date": "2024-03-31", "end_date": "2023-04-01",
    })
    assert response.status_code == 422


# --- Auth ---

def test_register_and_login(client):
    registered = client.post("/auth/register", json={
        "username": "alice", "email": "alice@example.com", "password": "correct-horse",
    })
    assert registered.status_code == 201
    assert "password_hash" not in registered.json()

    login = client.post("/auth/login", json={
        "username": "alice", "password": "correct-horse",
    })
    assert login.status_code == 200
    assert login.json()["success"] is True
    assert login.json()["user"]["username"] == "alice"


def test_login_wrong_password(client):
    client.post("/auth/register", json={
        "username": "alice", "email": "alice@example.com", "password": "correct-horse",
    })

    response = client.post("/auth/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 200
    assert response.json()["success"] is False


def test_register_duplicate_returns_400(client):
    payload = {"username": "alice", "email": "alice@example.com", "password": "correct-horse"}
    client.post("/auth/register", json=payload)

    assert client.post("/auth/register", json=payload).status_code == 400
