"""
Inventory API: inventory items keyed by SKU
"""
from urllib.parse import quote

from .client import EbayClient

INVENTORY_ITEM_PATH = "/sell/inventory/v1/inventory_item"


def get_listings(client: EbayClient, limit: int = 20, offset: int = 0) -> dict:
    data = client.get(INVENTORY_ITEM_PATH, params={"limit": limit, "offset": offset})
    return {
        "listings": data.get("inventoryItems") or [],
        "total": data.get("total", 0),
        "limit": data.get("limit", limit),
        "offset": offset,
    }


def get_listing(client: EbayClient, sku: str) -> dict:
    return client.get(f"{INVENTORY_ITEM_PATH}/{quote(sku, safe='')}")


def upsert_listing(client: EbayClient, sku: str, payload: dict) -> dict:
    """createOrReplaceInventoryItem; eBay answers 204 on success"""
    client.put(f"{INVENTORY_ITEM_PATH}/{quote(sku, safe='')}", json=payload)
    return {"sku": sku, "success": True}
