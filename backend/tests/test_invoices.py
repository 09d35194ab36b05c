import uuid

from tests.conftest import API


def invoice_payload(number="INV-001", **overrides):
    payload = {
        "invoice_number": number,
        "supplier_name": "Acme Supplies",
        "supplier_url": "https://acme.example.com",
        "date": "2024-03-01",
        "total_amount": 120.5,
        "pdf_link": "https://files.example.com/inv-001.pdf",
        "comments": "boxes and tape",
    }
    payload.update(overrides)
    return payload


def create_invoice(client, headers, number="INV-001", **overrides):
    response = client.post(f"{API}/invoices/", json=invoice_payload(number, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_get_invoice(client, headers):
    invoice = create_invoice(client, headers)
    assert invoice["invoice_number"] == "INV-001"
    assert invoice["total_amount"] == 120.5

    response = client.get(f"{API}/invoices/{invoice['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["supplier_name"] == "Acme Supplies"


def test_invoice_number_unique_per_user(client, headers, other_headers):
    create_invoice(client, headers)
    response = client.post(f"{API}/invoices/", json=invoice_payload(), headers=headers)
    assert response.status_code == 400

    # another user may reuse the number
    create_invoice(client, other_headers)


def test_missing_required_fields(client, headers):
    payload = invoice_payload()
    del payload["pdf_link"]
    response = client.post(f"{API}/invoices/", json=payload, headers=headers)
    assert response.status_code == 422


def test_list_search_and_pagination(client, headers):
    create_invoice(client, headers, "INV-001")
    create_invoice(client, headers, "INV-002", supplier_name="Box World", comments=None)
    create_invoice(client, headers, "INV-003", supplier_name="Box World", comments="urgent")

    response = client.get(f"{API}/invoices/", params={"limit": 2}, headers=headers)
    data = response.json()
    assert data["total"] == 3
    assert data["total_pages"] == 2
    assert len(data["items"]) == 2

    response = client.get(f"{API}/invoices/", params={"search": "urgent"}, headers=headers)
    assert [i["invoice_number"] for i in response.json()["items"]] == ["INV-003"]

    response = client.get(f"{API}/invoices/", params={"supplier": "box world"}, headers=headers)
    assert response.json()["total"] == 2


def test_update_keeps_invoice_number(client, headers):
    invoice = create_invoice(client, headers)

    response = client.put(
        f"{API}/invoices/{invoice['id']}",
        json=invoice_payload(supplier_name="Acme Ltd"),
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["supplier_name"] == "Acme Ltd"

    response = client.put(
        f"{API}/invoices/{invoice['id']}",
        json=invoice_payload("INV-999"),
        headers=headers,
    )
    assert response.status_code == 400


def test_invoices_are_private(client, headers, other_headers):
    invoice = create_invoice(client, headers)
    response = client.get(f"{API}/invoices/{invoice['id']}", headers=other_headers)
    assert response.status_code == 404


def test_delete_invoice(client, headers):
    invoice = create_invoice(client, headers)
    response = client.delete(f"{API}/invoices/{invoice['id']}", headers=headers)
    assert response.status_code == 200
    assert client.get(f"{API}/invoices/{invoice['id']}", headers=headers).status_code == 404


def test_unknown_invoice(client, headers):
    response = client.get(f"{API}/invoices/{uuid.uuid4()}", headers=headers)
    assert response.status_code == 404
