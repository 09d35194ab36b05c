"""
Stock replenishment
- inventory items: stock counter only
- products: stock + COG recalculation
- packaging: stock + running purchase totals + average unit cost

Functions add rows and flush; the caller owns the transaction
(commit on success, rollback on error).
"""
import logging
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from backoffice.models.inventory import InventoryItem, InventoryReplenishment
from backoffice.models.packaging import Packaging, PackagingReplenishment
from backoffice.models.product import Product, ProductReplenishment
from backoffice.utils.numbers import Number, to_decimal, safe_divide

logger = logging.getLogger(__name__)


def replenish_inventory_item(
    db: Session,
    item: InventoryItem,
    user_id: UUID,
    quantity: int,
    cost: Number,
    replenished_on: date,
    invoice_link: Optional[str] = None,
    comments: Optional[str] = None,
    expense_id: Optional[UUID] = None,
) -> InventoryReplenishment:
    cost = to_decimal(cost)
    replenishment = InventoryReplenishment(
        quantity=quantity,
        cost=cost,
        unit_cost=safe_divide(cost, quantity),
        date=replenished_on,
        invoice_link=invoice_link,
        comments=comments,
        inventory_item_id=item.id,
        expense_id=expense_id,
        user_id=user_id,
    )
    db.add(replenishment)

    item.current_quantity = (item.current_quantity or 0) + quantity
    db.flush()

    logger.info("Inventory item %s replenished: +%d (now %d)", item.id, quantity, item.current_quantity)
    return replenishment


def replenish_product(
    db: Session,
    product: Product,
    user_id: UUID,
    quantity: int,
    cost: Number,
    replenished_on: date,
    invoice_link: Optional[str] = None,
    comments: Optional[str] = None,
    expense_id: Optional[UUID] = None,
) -> ProductReplenishment:
    """Add stock and recompute the product's COG.

    total_cog grows by the replenishment cost and unit_cost becomes the
    weighted average total_cog / current_quantity.
    """
    cost = to_decimal(cost)
    replenishment = ProductReplenishment(
        quantity=quantity,
        cost=cost,
        unit_cost=safe_divide(cost, quantity),
        date=replenished_on,
        invoice_link=invoice_link,
        comments=comments,
        product_id=product.id,
        expense_id=expense_id,
        user_id=user_id,
    )
    db.add(replenishment)

    product.current_quantity = (product.current_quantity or 0) + quantity
    product.total_cog = to_decimal(product.total_cog) + cost
    product.unit_cost = safe_divide(product.total_cog, product.current_quantity)
    db.flush()

    logger.info(
        "Product %s replenished: +%d, total COG %s, unit cost %s",
        product.id, quantity, product.total_cog, product.unit_cost
    )
    return replenishment


def replenish_packaging(
    db: Session,
    packaging: Packaging,
    user_id: UUID,
    quantity: int,
    cost: Number,
    replenished_on: date,
    shipping: Number = 0,
    vat: Number = 0,
    total_cost: Optional[Number] = None,
    unit_cost: Optional[Number] = None,
    invoice_link: Optional[str] = None,
    comments: Optional[str] = None,
    expense_id: Optional[UUID] = None,
) -> PackagingReplenishment:
    """Add stock and fold the purchase into the packaging's running totals.

    total_cost defaults to cost + shipping + vat and the replenishment's
    unit_cost to total_cost / quantity. The packaging's unit_cost becomes
    the average over everything on hand.
    """
    cost = to_decimal(cost)
    shipping = to_decimal(shipping)
    vat = to_decimal(vat)
    total_cost = to_decimal(total_cost) if total_cost is not None else cost + shipping + vat
    unit_cost = to_decimal(unit_cost) if unit_cost is not None else safe_divide(total_cost, quantity)

    replenishment = PackagingReplenishment(
        quantity=quantity,
        cost=cost,
        shipping=shipping,
        vat=vat,
        total_cost=total_cost,
        unit_cost=unit_cost,
        date=replenished_on,
        invoice_link=invoice_link,
        comments=comments,
        packaging_id=packaging.id,
        expense_id=expense_id,
        user_id=user_id,
    )
    db.add(replenishment)

    packaging.current_quantity = (packaging.current_quantity or 0) + quantity
    packaging.quantity = (packaging.quantity or 0) + quantity
    packaging.cost = to_decimal(packaging.cost) + cost
    packaging.shipping = to_decimal(packaging.shipping) + shipping
    packaging.vat = to_decimal(packaging.vat) + vat
    packaging.total_cost = to_decimal(packaging.total_cost) + total_cost
    packaging.total_cog = to_decimal(packaging.total_cog) + total_cost
    packaging.unit_cost = safe_divide(packaging.total_cost, packaging.current_quantity)
    db.flush()

    logger.info(
        "Packaging %s replenished: +%d, average unit cost %s",
        packaging.id, quantity, packaging.unit_cost
    )
    return replenishment
