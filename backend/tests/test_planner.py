from decimal import Decimal

from backoffice.models.plan import Marketplace
from backoffice.services.profit import calculate_profit
from tests.conftest import API


def plan_payload(**overrides):
    payload = {
        "product_name": "Desk lamp",
        "ean": "4006381333931",
        "unit_price": 20,
        "sell_price": 100,
        "source_link": "https://supplier.example.com/lamp",
        "shipping_cost": 5,
        "status": "researching",
        "ebay_details": {"vat": 19, "ebay_commission": 15},
    }
    payload.update(overrides)
    return payload


def test_ebay_profit():
    result = calculate_profit(
        Marketplace.ebay, unit_price=20, sell_price=100, shipping_cost=5, vat=19, ebay_commission=15
    )
    assert result["total_revenue"] == Decimal("100.00")
    assert result["net_revenue"] == Decimal("84.03")
    assert result["vat_amount"] == Decimal("15.97")
    assert result["marketplace_fee"] == Decimal("15.00")
    assert result["total_costs"] == Decimal("40.00")
    assert result["profit"] == Decimal("44.03")
    assert result["margin"] == Decimal("44.03")


def test_ebay_advertising_includes_vat():
    result = calculate_profit(
        Marketplace.ebay, unit_price=0, sell_price=100, vat=20, ebay_commission=0, advertising_percentage=5
    )
    assert result["marketplace_fee"] == Decimal("6.00")


def test_amazon_profit():
    result = calculate_profit(
        Marketplace.amazon, unit_price=20, sell_price=100, shipping_cost=5, fulfillment_cost=3
    )
    assert result["marketplace_fee"] == Decimal("18.00")
    assert result["profit"] == Decimal("57.00")


def test_zero_revenue_margin():
    result = calculate_profit("ebay", unit_price=10, sell_price=0)
    assert result["margin"] == Decimal("0.00")
    assert result["profit"] == Decimal("-10.00")


def test_calculate_endpoint(client, headers):
    response = client.post(
        f"{API}/planner/calculate",
        json={"unit_price": 20, "sell_price": 100, "shipping_cost": 5, "vat": 19},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["profit"] == 44.03


def test_create_plan_computes_profit(client, headers):
    response = client.post(f"{API}/planner/ebay", json=plan_payload(), headers=headers)
    assert response.status_code == 201, response.text
    plan = response.json()
    assert plan["profit"] == 44.03
    assert plan["marketplace"] == "ebay"
    assert plan["ebay_details"]["vat"] == 19
    assert plan["amazon_details"] is None


def test_create_plan_keeps_given_profit(client, headers):
    plan = client.post(f"{API}/planner/ebay", json=plan_payload(profit=12.5), headers=headers).json()
    assert plan["profit"] == 12.5


def test_plan_validation(client, headers):
    response = client.post(f"{API}/planner/ebay", json=plan_payload(sell_price=0), headers=headers)
    assert response.status_code == 422


def test_update_upserts_details(client, headers):
    plan = client.post(f"{API}/planner/ebay", json=plan_payload(), headers=headers).json()

    response = client.put(
        f"{API}/planner/ebay/{plan['id']}",
        json=plan_payload(
            marketplace="amazon",
            ebay_details=None,
            amazon_details={"fulfillment_cost": 3, "fulfillment_type": "FBM"},
        ),
        headers=headers,
    )
    assert response.status_code == 200, response.text
    data = response.json()
    assert data["marketplace"] == "amazon"
    assert data["profit"] == 57
    assert data["amazon_details"]["fulfillment_type"] == "FBM"

    amazon = client.get(f"{API}/planner/ebay", params={"marketplace": "amazon"}, headers=headers).json()
    assert [p["id"] for p in amazon] == [plan["id"]]
    assert client.get(f"{API}/planner/ebay", params={"marketplace": "ebay"}, headers=headers).json() == []


def test_plans_are_private_and_deletable(client, headers, other_headers):
    plan = client.post(f"{API}/planner/ebay", json=plan_payload(), headers=headers).json()
    url = f"{API}/planner/ebay/{plan['id']}"

    assert client.get(url, headers=other_headers).status_code == 404
    assert client.delete(url, headers=headers).status_code == 200
    assert client.get(url, headers=headers).status_code == 404
