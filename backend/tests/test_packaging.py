import pytest

from tests.conftest import API
from tests.test_products import create_packaging


def test_create_requires_name_type_and_cost(client, headers):
    response = client.post(f"{API}/packaging/", json={"name": "Box", "unit_cost": 1}, headers=headers)
    assert response.status_code == 422

    packaging = create_packaging(client, headers)
    assert packaging["current_quantity"] == 0
    assert packaging["total_cog"] == 0
    assert packaging["quantity"] is None


def test_replenish_defaults_totals(client, headers):
    packaging = create_packaging(client, headers)
    payload = {"quantity": 10, "cost": 20, "shipping": 5, "vat": 5, "date": "2024-03-01"}

    response = client.post(f"{API}/packaging/{packaging['id']}/replenish", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["replenishment"]["total_cost"] == 30
    assert data["replenishment"]["unit_cost"] == 3
    assert data["packaging"]["current_quantity"] == 10
    assert data["packaging"]["quantity"] == 10
    assert data["packaging"]["total_cost"] == 30
    assert data["packaging"]["unit_cost"] == 3


def test_replenish_accumulates_and_averages(client, headers):
    packaging = create_packaging(client, headers)
    base = {"shipping": 0, "vat": 0, "date": "2024-03-01"}

    client.post(
        f"{API}/packaging/{packaging['id']}/replenish",
        json={**base, "quantity": 10, "cost": 10},
        headers=headers,
    )
    response = client.post(
        f"{API}/packaging/{packaging['id']}/replenish",
        json={**base, "quantity": 30, "cost": 40, "vat": 5, "total_cost": 50, "unit_cost": 1.5},
        headers=headers,
    )
    data = response.json()
    assert data["replenishment"]["unit_cost"] == 1.5
    assert data["packaging"]["current_quantity"] == 40
    assert data["packaging"]["cost"] == 50
    assert data["packaging"]["vat"] == 5
    assert data["packaging"]["total_cost"] == 60
    assert data["packaging"]["unit_cost"] == pytest.approx(1.5)


def test_replenish_requires_fields(client, headers):
    packaging = create_packaging(client, headers)
    response = client.post(
        f"{API}/packaging/{packaging['id']}/replenish",
        json={"quantity": 5, "cost": 10, "date": "2024-03-01"},
        headers=headers,
    )
    assert response.status_code == 422


def test_search_by_type(client, headers):
    create_packaging(client, headers, name="Mailer box")
    client.post(f"{API}/packaging/", json={"name": "Poly mailer", "type": "bag", "unit_cost": 0.2}, headers=headers)

    data = client.get(f"{API}/packaging/", params={"search": "bag"}, headers=headers).json()
    assert [p["name"] for p in data["items"]] == ["Poly mailer"]


def test_update_and_soft_delete(client, headers):
    packaging = create_packaging(client, headers)
    response = client.put(
        f"{API}/packaging/{packaging['id']}",
        json={"name": "Mailer box L", "type": "box", "unit_cost": 1.1, "quantity": 100, "cost": 110},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["quantity"] == 100
    assert response.json()["shipping"] is None

    assert client.delete(f"{API}/packaging/{packaging['id']}", headers=headers).status_code == 200
    assert client.get(f"{API}/packaging/{packaging['id']}", headers=headers).status_code == 404


def test_replenish_accepts_camel_case(client, headers):
    packaging = create_packaging(client, headers)
    expense = client.post(
        f"{API}/expenses/from-purchase-order",
        json={"poNumber": "PO-2024-000002", "expenses": [
            {"expenseId": "EXP-1", "itemName": "Mailer box", "quantity": 10, "cost": 50, "date": "2024-03-01"},
        ]},
        headers=headers,
    ).json()["expenses"][0]

    response = client.post(
        f"{API}/packaging/{packaging['id']}/replenish",
        json={
            "quantity": 10, "cost": 10, "shipping": 0, "vat": 0,
            "totalCost": 50, "unitCost": 4, "date": "2024-03-01",
            "invoiceLink": "https://drive.example.com/inv.pdf", "expenseId": expense["id"],
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["replenishment"]["total_cost"] == 50
    assert data["replenishment"]["unit_cost"] == 4
    assert data["replenishment"]["invoice_link"] == "https://drive.example.com/inv.pdf"
    assert data["replenishment"]["expense_id"] == expense["id"]
    assert data["packaging"]["unit_cost"] == 5
