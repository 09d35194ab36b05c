import pytest

from tests.conftest import API
from tests.test_invoices import create_invoice


@pytest.fixture
def invoice(client, headers):
    return create_invoice(client, headers)


def expense_payload(invoice_id, expense_id="EXP-001", **overrides):
    payload = {
        "expense_id": expense_id,
        "invoice_id": invoice_id,
        "item_name": "Shipping boxes",
        "category": "Packaging Materials",
        "quantity": 3,
        "cost": 10,
        "shipping_cost": 2,
        "vat": 3,
        "date": "2024-03-02",
        "comment": "small boxes",
    }
    payload.update(overrides)
    return payload


def test_create_expense_computes_totals(client, headers, invoice):
    response = client.post(f"{API}/expenses/", json=expense_payload(invoice["id"]), headers=headers)
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["total_cost"] == 15
    assert data["unit_price"] == 5
    assert data["invoice"]["invoice_number"] == "INV-001"


def test_explicit_totals_are_kept(client, headers, invoice):
    payload = expense_payload(invoice["id"], total_cost=20, unit_price=7)
    data = client.post(f"{API}/expenses/", json=payload, headers=headers).json()
    assert data["total_cost"] == 20
    assert data["unit_price"] == 7


def test_invoice_is_required(client, headers):
    payload = expense_payload(None)
    del payload["invoice_id"]
    response = client.post(f"{API}/expenses/", json=payload, headers=headers)
    assert response.status_code == 422


def test_invoice_of_other_user_rejected(client, headers, other_headers):
    foreign = create_invoice(client, other_headers, "INV-X")
    response = client.post(f"{API}/expenses/", json=expense_payload(foreign["id"]), headers=headers)
    assert response.status_code == 400


@pytest.mark.parametrize("field,value", [("quantity", 0), ("cost", 0), ("cost", -5)])
def test_positive_quantity_and_cost(client, headers, invoice, field, value):
    payload = expense_payload(invoice["id"], **{field: value})
    response = client.post(f"{API}/expenses/", json=payload, headers=headers)
    assert response.status_code == 422


def test_duplicate_expense_id(client, headers, invoice):
    client.post(f"{API}/expenses/", json=expense_payload(invoice["id"]), headers=headers)
    response = client.post(f"{API}/expenses/", json=expense_payload(invoice["id"]), headers=headers)
    assert response.status_code == 400


def test_list_newest_first(client, headers, invoice):
    client.post(f"{API}/expenses/", json=expense_payload(invoice["id"], "EXP-001", date="2024-01-01"), headers=headers)
    client.post(f"{API}/expenses/", json=expense_payload(invoice["id"], "EXP-002", date="2024-02-01"), headers=headers)

    data = client.get(f"{API}/expenses/", headers=headers).json()
    assert data["total"] == 2
    assert [e["expense_id"] for e in data["items"]] == ["EXP-002", "EXP-001"]


def test_update_expense(client, headers, invoice):
    expense = client.post(f"{API}/expenses/", json=expense_payload(invoice["id"]), headers=headers).json()
    client.post(f"{API}/expenses/", json=expense_payload(invoice["id"], "EXP-002"), headers=headers)

    # unchanged business id is not a conflict
    response = client.put(
        f"{API}/expenses/{expense['id']}",
        json=expense_payload(invoice["id"], quantity=5, cost=20, shipping_cost=0, vat=0),
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["unit_price"] == 4

    response = client.put(
        f"{API}/expenses/{expense['id']}",
        json=expense_payload(invoice["id"], "EXP-002"),
        headers=headers,
    )
    assert response.status_code == 400


def test_delete_expense(client, headers, invoice):
    expense = client.post(f"{API}/expenses/", json=expense_payload(invoice["id"]), headers=headers).json()
    assert client.delete(f"{API}/expenses/{expense['id']}", headers=headers).status_code == 200
    assert client.get(f"{API}/expenses/{expense['id']}", headers=headers).status_code == 404


def test_from_purchase_order_skips_bad_records(client, headers, invoice):
    client.post(f"{API}/expenses/", json=expense_payload(invoice["id"], "EXP-PO-1"), headers=headers)

    payload = {
        "po_number": "PO-2024-123456",
        "expenses": [
            {"expense_id": "EXP-PO-1", "item_name": "Duplicate", "quantity": 1, "cost": 5, "date": "2024-03-05"},
            {"expense_id": "EXP-PO-2", "item_name": "Mailer bags", "quantity": 4, "cost": 8, "date": "2024-03-05"},
        ],
    }
    response = client.post(f"{API}/expenses/from-purchase-order", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    data = response.json()
    assert data["failed"] == ["Duplicate"]
    assert len(data["expenses"]) == 1

    created = data["expenses"][0]
    assert created["po_number"] == "PO-2024-123456"
    assert created["category"] == "Packaging Materials"
    assert created["total_cost"] == 8
    assert created["unit_price"] == 2
    assert created["invoice"] is None


def test_from_purchase_order_requires_records(client, headers):
    payload = {"po_number": "PO-2024-000001", "expenses": []}
    response = client.post(f"{API}/expenses/from-purchase-order", json=payload, headers=headers)
    assert response.status_code == 400


def test_from_purchase_order_accepts_camel_case(client, headers):
    payload = {
        "poNumber": "PO-2024-000001",
        "expenses": [
            {"expenseId": "EXP-PO-9", "itemName": "Tape", "quantity": 5, "cost": 10,
             "unitPrice": 1.5, "date": "2024-03-05", "supplier": "BoxCo"},
        ],
    }
    response = client.post(f"{API}/expenses/from-purchase-order", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    created = response.json()["expenses"][0]
    assert created["expense_id"] == "EXP-PO-9"
    assert created["po_number"] == "PO-2024-000001"
    assert created["unit_price"] == 1.5
