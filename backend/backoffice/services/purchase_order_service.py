"""
Purchase orders
- PO number generation
- creation (order + lines in one transaction)
- receiving: stock, COG and one expense per line
"""
import logging
import time
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from backoffice.models.expense import Expense
from backoffice.models.packaging import Packaging
from backoffice.models.purchase_order import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
)
from backoffice.schemas.purchase_order import PurchaseOrderCreate, PurchaseOrderUpdate
from backoffice.services.replenishment import replenish_packaging
from backoffice.utils.numbers import to_decimal

logger = logging.getLogger(__name__)

PACKAGING_EXPENSE_CATEGORY = "Packaging Materials"


class PurchaseOrderError(ValueError):
    pass


def generate_po_number(now: Optional[float] = None) -> str:
    """PO-<year>-<last 6 digits of the millisecond timestamp>"""
    now = time.time() if now is None else now
    millis = str(int(now * 1000))
    return f"PO-{time.gmtime(now).tm_year}-{millis[-6:]}"


def line_expense_id(po_number: str, item_id: UUID) -> str:
    return f"EXP-{po_number}-{str(item_id)[-4:]}"


def create_purchase_order(db: Session, user_id: UUID, obj_in: PurchaseOrderCreate) -> PurchaseOrder:
    """Create the order and its lines; raises PurchaseOrderError on foreign packaging"""
    packaging_ids = {line.packaging_id for line in obj_in.items}
    owned = {
        row.id for row in db.query(Packaging.id).filter(
            Packaging.id.in_(packaging_ids),
            Packaging.user_id == user_id
        ).all()
    }
    missing = packaging_ids - owned
    if missing:
        raise PurchaseOrderError("Packaging not found: " + ", ".join(sorted(str(m) for m in missing)))

    po_number = generate_po_number()
    while db.query(PurchaseOrder.id).filter(PurchaseOrder.po_number == po_number).first():
        time.sleep(0.001)
        po_number = generate_po_number()

    order = PurchaseOrder(
        po_number=po_number,
        status=PurchaseOrderStatus.PENDING,
        supplier=obj_in.supplier,
        notes=obj_in.notes,
        expected_delivery=obj_in.expected_delivery,
        user_id=user_id,
    )

    total = to_decimal(0)
    for line in obj_in.items:
        unit_cost = to_decimal(line.unit_cost)
        line_total = unit_cost * line.quantity
        total += line_total
        order.items.append(PurchaseOrderItem(
            packaging_id=line.packaging_id,
            quantity=line.quantity,
            unit_cost=unit_cost,
            total_cost=line_total,
            supplier=line.supplier,
            notes=line.notes,
        ))
    order.total_cost = total

    db.add(order)
    db.flush()
    logger.info("Purchase order %s created with %d lines", po_number, len(order.items))
    return order


def receive_purchase_order(db: Session, order: PurchaseOrder, received_on: date) -> list[Expense]:
    """Book every line of the order into stock.

    Each line gets one expense and one packaging replenishment linked to
    it. A line whose expense already exists has been booked before and is
    skipped.
    """
    expenses: list[Expense] = []

    for item in order.items:
        expense_id = line_expense_id(order.po_number, item.id)
        existing = db.query(Expense.id).filter(
            Expense.expense_id == expense_id,
            Expense.user_id == order.user_id
        ).first()
        if existing:
            logger.info("Expense %s already exists, line not booked again", expense_id)
            continue

        total_cost = to_decimal(item.total_cost)
        expense = Expense(
            expense_id=expense_id,
            item_name=item.packaging.name,
            category=PACKAGING_EXPENSE_CATEGORY,
            quantity=item.quantity,
            cost=total_cost,
            shipping_cost=0,
            vat=0,
            total_cost=total_cost,
            unit_price=to_decimal(item.unit_cost),
            date=received_on,
            comment=f"Received with purchase order {order.po_number}",
            po_number=order.po_number,
            supplier=item.supplier or order.supplier,
            user_id=order.user_id,
        )
        db.add(expense)
        db.flush()
        expenses.append(expense)

        replenish_packaging(
            db,
            item.packaging,
            order.user_id,
            quantity=item.quantity,
            cost=total_cost,
            replenished_on=received_on,
            comments=f"Purchase order {order.po_number}",
            expense_id=expense.id,
        )

    return expenses


def update_purchase_order(db: Session, order: PurchaseOrder, obj_in: PurchaseOrderUpdate) -> PurchaseOrder:
    update_data = obj_in.model_dump(exclude_unset=True)
    new_status = update_data.pop("status", None)

    for field, value in update_data.items():
        setattr(order, field, value)

    if new_status is not None and new_status != order.status:
        if new_status == PurchaseOrderStatus.RECEIVED:
            if order.actual_delivery is None:
                order.actual_delivery = date.today()
            created = receive_purchase_order(db, order, order.actual_delivery)
            logger.info("Purchase order %s received, %d expenses created", order.po_number, len(created))
        order.status = new_status

    db.flush()
    return order
