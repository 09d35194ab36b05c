import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from backoffice.models.expense import Expense
from backoffice.schemas.expense import (
    ExpenseCreate,
    ExpenseUpdate,
    PurchaseOrderExpenseIn,
)
from backoffice.utils.numbers import to_decimal, safe_divide

logger = logging.getLogger(__name__)


def _apply_totals(expense: Expense, obj_in: Union[ExpenseCreate, ExpenseUpdate]) -> None:
    cost = to_decimal(obj_in.cost)
    shipping_cost = to_decimal(obj_in.shipping_cost)
    vat = to_decimal(obj_in.vat)
    total_cost = (
        to_decimal(obj_in.total_cost)
        if obj_in.total_cost is not None
        else cost + shipping_cost + vat
    )

    expense.cost = cost
    expense.shipping_cost = shipping_cost
    expense.vat = vat
    expense.total_cost = total_cost
    expense.unit_price = (
        to_decimal(obj_in.unit_price)
        if obj_in.unit_price is not None
        else safe_divide(total_cost, obj_in.quantity)
    )


def get_expenses(
    db: Session,
    user_id: UUID,
    skip: int = 0,
    limit: int = 100,
) -> tuple[list[Expense], int]:
    """Expense list, newest first, with the linked invoice loaded"""
    query = db.query(Expense).filter(Expense.user_id == user_id)

    total = query.count()
    items = query.options(joinedload(Expense.invoice)).order_by(
        Expense.date.desc(),
        Expense.created_at.desc()
    ).offset(skip).limit(limit).all()

    return items, total


def get_expense(db: Session, user_id: UUID, expense_pk: UUID) -> Optional[Expense]:
    return db.query(Expense).filter(
        Expense.id == expense_pk,
        Expense.user_id == user_id
    ).first()


def get_expense_by_business_id(db: Session, user_id: UUID, expense_id: str) -> Optional[Expense]:
    return db.query(Expense).filter(
        Expense.expense_id == expense_id,
        Expense.user_id == user_id
    ).first()


def create_expense(db: Session, user_id: UUID, obj_in: ExpenseCreate) -> Expense:
    expense = Expense(
        expense_id=obj_in.expense_id,
        invoice_id=obj_in.invoice_id,
        item_name=obj_in.item_name,
        category=obj_in.category,
        quantity=obj_in.quantity,
        date=obj_in.date,
        comment=obj_in.comment,
        user_id=user_id,
    )
    _apply_totals(expense, obj_in)
    db.add(expense)
    db.commit()
    db.refresh(expense)
    return expense


def update_expense(db: Session, expense: Expense, obj_in: ExpenseUpdate) -> Expense:
    expense.expense_id = obj_in.expense_id
    expense.invoice_id = obj_in.invoice_id
    expense.item_name = obj_in.item_name
    expense.category = obj_in.category
    expense.quantity = obj_in.quantity
    expense.date = obj_in.date
    expense.comment = obj_in.comment
    _apply_totals(expense, obj_in)
    db.commit()
    db.refresh(expense)
    return expense


def delete_expense(db: Session, expense: Expense) -> None:
    db.delete(expense)
    db.commit()


def create_expenses_from_purchase_order(
    db: Session,
    user_id: UUID,
    po_number: str,
    records: list[PurchaseOrderExpenseIn],
) -> tuple[list[Expense], list[str]]:
    """Bulk-create expenses for a purchase order.

    Each record is written inside its own savepoint, so one bad record
    (for example a duplicate expense id) is logged and skipped without
    losing the others.
    """
    created: list[Expense] = []
    failed: list[str] = []

    for record in records:
        if get_expense_by_business_id(db, user_id, record.expense_id):
            logger.warning("Expense %s already exists, skipping", record.expense_id)
            failed.append(record.item_name)
            continue

        cost = to_decimal(record.cost)
        expense = Expense(
            expense_id=record.expense_id,
            item_name=record.item_name,
            category=record.category,
            quantity=record.quantity,
            cost=cost,
            shipping_cost=0,
            vat=0,
            total_cost=cost,
            unit_price=(
                to_decimal(record.unit_price)
                if record.unit_price is not None
                else safe_divide(cost, record.quantity)
            ),
            date=record.date,
            comment=record.comment,
            po_number=record.po_number or po_number,
            supplier=record.supplier,
            user_id=user_id,
        )
        savepoint = db.begin_nested()
        try:
            db.add(expense)
            db.flush()
            savepoint.commit()
            created.append(expense)
        except Exception:
            savepoint.rollback()
            logger.exception("Failed to create expense %s for PO %s", record.expense_id, po_number)
            failed.append(record.item_name)

    db.commit()
    for expense in created:
        db.refresh(expense)
    return created, failed
