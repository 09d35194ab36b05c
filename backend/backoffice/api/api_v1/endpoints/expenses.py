import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.crud import crud_expense, crud_invoice
from backoffice.models.user import User
from backoffice.schemas.common import Message
from backoffice.schemas.expense import (
    ExpenseCreate,
    ExpenseUpdate,
    Expense as ExpenseSchema,
    ExpenseList,
    ExpensesFromPurchaseOrder,
    ExpensesFromPurchaseOrderResult,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _check_invoice(db: Session, user: User, invoice_id: UUID) -> None:
    if not crud_invoice.get_invoice(db, user.id, invoice_id):
        raise HTTPException(status_code=400, detail="Invoice not found")

@router.get("/", response_model=ExpenseList)
def get_expenses(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Expense list, newest first"""
    items, total = crud_expense.get_expenses(db, current_user.id, skip=skip, limit=limit)
    return ExpenseList(total=total, items=items)

@router.post("/", response_model=ExpenseSchema, status_code=status.HTTP_201_CREATED)
def create_expense(
    expense_in: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create an expense"""
    _check_invoice(db, current_user, expense_in.invoice_id)
    if crud_expense.get_expense_by_business_id(db, current_user.id, expense_in.expense_id):
        raise HTTPException(status_code=400, detail="Expense ID already exists")
    return crud_expense.create_expense(db, current_user.id, expense_in)

@router.post(
    "/from-purchase-order",
    response_model=ExpensesFromPurchaseOrderResult,
    status_code=status.HTTP_201_CREATED
)
def create_expenses_from_purchase_order(
    payload: ExpensesFromPurchaseOrder,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Bulk-create expenses for a purchase order; bad records are skipped"""
    if not payload.expenses:
        raise HTTPException(status_code=400, detail="No expenses provided")

    created, failed = crud_expense.create_expenses_from_purchase_order(
        db, current_user.id, payload.po_number, payload.expenses
    )
    logger.info(
        "PO %s: %d expenses created, %d failed",
        payload.po_number, len(created), len(failed)
    )
    return {
        "message": f"Created {len(created)} expenses from purchase order",
        "po_number": payload.po_number,
        "expenses": created,
        "failed": failed,
    }

@router.get("/{expense_id}", response_model=ExpenseSchema)
def get_expense(
    expense_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Expense detail"""
    expense = crud_expense.get_expense(db, current_user.id, expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense

@router.put("/{expense_id}", response_model=ExpenseSchema)
def update_expense(
    expense_id: UUID,
    expense_in: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update an expense"""
    expense = crud_expense.get_expense(db, current_user.id, expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")

    _check_invoice(db, current_user, expense_in.invoice_id)
    # business id must stay unique; only checked when it changes
    if expense_in.expense_id != expense.expense_id and crud_expense.get_expense_by_business_id(
        db, current_user.id, expense_in.expense_id
    ):
        raise HTTPException(status_code=400, detail="Expense ID already exists")

    return crud_expense.update_expense(db, expense, expense_in)

@router.delete("/{expense_id}", response_model=Message)
def delete_expense(
    expense_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Delete an expense"""
    expense = crud_expense.get_expense(db, current_user.id, expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    crud_expense.delete_expense(db, expense)
    return {"message": "Expense deleted successfully"}
