import pytest

from tests.conftest import API


def create_packaging(client, headers, name="Mailer box"):
    response = client.post(
        f"{API}/packaging/",
        json={"name": name, "type": "box", "unit_cost": 0.8},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def create_product(client, headers, **overrides):
    payload = {"name": "Phone case", "sku": "CASE-01", "unit_cost": 5}
    payload.update(overrides)
    response = client.post(f"{API}/products/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def replenish(client, headers, product_id, quantity, cost):
    response = client.post(
        f"{API}/products/{product_id}/replenish",
        json={"quantity": quantity, "cost": cost, "date": "2024-03-01"},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_create_product(client, headers):
    product = create_product(client, headers)
    assert product["type"] == "FBA"
    assert product["current_quantity"] == 0
    assert product["total_cog"] == 0
    assert product["unit_cost"] == 5


def test_fbm_requires_packaging(client, headers):
    response = client.post(
        f"{API}/products/",
        json={"name": "Mug", "unit_cost": 3, "type": "FBM"},
        headers=headers,
    )
    assert response.status_code == 422

    packaging = create_packaging(client, headers)
    product = create_product(client, headers, name="Mug", type="FBM", linked_packaging=packaging["id"])
    assert product["linked_packaging"] == packaging["id"]


def test_foreign_packaging_rejected(client, headers, other_headers):
    packaging = create_packaging(client, other_headers)
    response = client.post(
        f"{API}/products/",
        json={"name": "Mug", "unit_cost": 3, "type": "FBM", "linked_packaging": packaging["id"]},
        headers=headers,
    )
    assert response.status_code == 400


def test_replenish_recalculates_cog(client, headers):
    product = create_product(client, headers)

    data = replenish(client, headers, product["id"], quantity=10, cost=50)
    assert data["replenishment"]["unit_cost"] == 5
    assert data["product"]["current_quantity"] == 10
    assert data["product"]["total_cog"] == 50
    assert data["product"]["unit_cost"] == 5

    data = replenish(client, headers, product["id"], quantity=10, cost=100)
    assert data["replenishment"]["unit_cost"] == 10
    assert data["product"]["current_quantity"] == 20
    assert data["product"]["total_cog"] == 150
    assert data["product"]["unit_cost"] == pytest.approx(7.5)

    detail = client.get(f"{API}/products/{product['id']}", headers=headers).json()
    assert [r["quantity"] for r in detail["replenishments"]] == [10, 10]
    assert detail["last_replenishment"]["cost"] == 100


def test_update_requires_quantity_cost_and_type(client, headers):
    product = create_product(client, headers)
    response = client.put(
        f"{API}/products/{product['id']}",
        json={"name": "Phone case", "quantity": 0, "cost": 10, "type": "FBA"},
        headers=headers,
    )
    assert response.status_code == 422

    response = client.put(
        f"{API}/products/{product['id']}",
        json={"name": "Phone case v2", "quantity": 100, "cost": 200, "shipping": 20, "vat": 40, "type": "FBA"},
        headers=headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Phone case v2"
    assert data["total_cost"] == 260
    # COG figure is left alone when no unit cost is sent
    assert data["unit_cost"] == 5


def test_search_and_soft_delete(client, headers):
    product = create_product(client, headers)
    create_product(client, headers, name="Charger", sku="CHG-01")

    data = client.get(f"{API}/products/", params={"search": "chg"}, headers=headers).json()
    assert [p["name"] for p in data["items"]] == ["Charger"]

    assert client.delete(f"{API}/products/{product['id']}", headers=headers).status_code == 200
    assert client.get(f"{API}/products/{product['id']}", headers=headers).status_code == 404
    assert client.get(f"{API}/products/", headers=headers).json()["total"] == 1
