from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field
from backoffice.schemas.common import CamelRequest

class ExpenseBase(BaseModel):
    expense_id: str = Field(..., min_length=1)
    invoice_id: Optional[UUID] = None
    item_name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    cost: float = Field(..., gt=0)
    shipping_cost: float = Field(0, ge=0)
    vat: float = Field(0, ge=0)
    total_cost: Optional[float] = Field(None, ge=0)  # defaults to cost + shipping + vat
    unit_price: Optional[float] = Field(None, ge=0)  # defaults to total / quantity
    date: date
    comment: Optional[str] = None

class ExpenseCreate(ExpenseBase):
    invoice_id: UUID

class ExpenseUpdate(ExpenseBase):
    invoice_id: UUID

class InvoiceRef(BaseModel):
    id: UUID
    invoice_number: str

    class Config:
        from_attributes = True

class Expense(BaseModel):
    id: UUID
    expense_id: str
    invoice_id: Optional[UUID] = None
    item_name: str
    category: str
    quantity: int
    cost: float
    shipping_cost: float = 0
    vat: float = 0
    total_cost: float
    unit_price: float
    date: date
    comment: Optional[str] = None
    po_number: Optional[str] = None
    supplier: Optional[str] = None
    invoice: Optional[InvoiceRef] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ExpenseList(BaseModel):
    total: int
    items: List[Expense]

# bulk creation from a purchase order
class PurchaseOrderExpenseIn(CamelRequest):
    expense_id: str = Field(..., min_length=1)
    item_name: str = Field(..., min_length=1)
    category: str = "Packaging Materials"
    quantity: int = Field(..., gt=0)
    cost: float = Field(..., ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    date: date
    comment: Optional[str] = None
    po_number: Optional[str] = None
    supplier: Optional[str] = None

class ExpensesFromPurchaseOrder(CamelRequest):
    po_number: str = Field(..., min_length=1)
    expenses: List[PurchaseOrderExpenseIn]

class ExpensesFromPurchaseOrderResult(BaseModel):
    message: str
    po_number: str
    expenses: List[Expense]
    failed: List[str] = []
