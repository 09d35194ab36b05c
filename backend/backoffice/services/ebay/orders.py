"""
Fulfillment API: seller orders, normalized to a flat shape
"""
from datetime import datetime
from typing import Optional

from .client import EbayClient

ORDER_PATH = "/sell/fulfillment/v1/order"


def _to_float(value, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value, default: int = 1) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def transform_address(raw: dict) -> dict:
    contact = raw.get("contactAddress") or {}
    return {
        "name": raw.get("fullName") or "",
        "address_line1": contact.get("addressLine1") or "",
        "address_line2": contact.get("addressLine2"),
        "city": contact.get("city") or "",
        "state": contact.get("stateOrProvince") or "",
        "postal_code": contact.get("postalCode") or "",
        "country": contact.get("countryCode") or "",
        "phone": (raw.get("primaryPhone") or {}).get("phoneNumber") or raw.get("phoneNumber"),
    }


def transform_line_item(raw: dict) -> dict:
    return {
        "item_id": raw.get("legacyItemId") or raw.get("itemId") or raw.get("lineItemId") or "",
        "title": raw.get("title") or "",
        "quantity": _to_int(raw.get("quantity")),
        "price": _to_float((raw.get("lineItemCost") or {}).get("value")),
        "sku": raw.get("sku"),
        "image_url": (raw.get("image") or {}).get("imageUrl") or raw.get("imageUrl"),
    }


def transform_order(raw: dict) -> dict:
    buyer = raw.get("buyer") or {}
    total = (raw.get("pricingSummary") or {}).get("total") or {}
    instructions = raw.get("fulfillmentStartInstructions") or [{}]
    # the API returns a list; older payloads a single object
    if isinstance(instructions, list):
        instructions = instructions[0] if instructions else {}
    ship_to = (instructions.get("shippingStep") or {}).get("shipTo") or {}

    return {
        "order_id": raw.get("orderId") or "",
        "buyer_id": buyer.get("username") or "",
        "buyer_email": (buyer.get("buyerRegistrationAddress") or {}).get("email") or buyer.get("email") or "",
        "total_amount": _to_float(total.get("value")),
        "currency": total.get("currency") or "USD",
        "status": raw.get("orderFulfillmentStatus") or "PENDING",
        "line_items": [transform_line_item(item) for item in raw.get("lineItems") or []],
        "shipping_address": transform_address(ship_to),
        "created_at": raw.get("creationDate"),
        "updated_at": raw.get("lastModifiedDate"),
    }


def _iso(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def build_order_filter(
    fulfillment_status: Optional[list] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> Optional[str]:
    parts = []
    if fulfillment_status:
        parts.append("orderfulfillmentstatus:{" + "|".join(fulfillment_status) + "}")
    if start_date or end_date:
        start = _iso(start_date) if start_date else ""
        end = _iso(end_date) if end_date else ""
        parts.append(f"creationdate:[{start}..{end}]")
    return ",".join(parts) or None


def get_orders(
    client: EbayClient,
    limit: int = 20,
    offset: int = 0,
    fulfillment_status: Optional[list] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> dict:
    params = {"limit": limit, "offset": offset}
    order_filter = build_order_filter(fulfillment_status, start_date, end_date)
    if order_filter:
        params["filter"] = order_filter

    data = client.get(ORDER_PATH, params=params)
    return {
        "orders": [transform_order(order) for order in data.get("orders") or []],
        "total": data.get("total", 0),
        "limit": data.get("limit", limit),
        "offset": data.get("offset", offset),
    }


def get_order(client: EbayClient, order_id: str) -> dict:
    return transform_order(client.get(f"{ORDER_PATH}/{order_id}"))
