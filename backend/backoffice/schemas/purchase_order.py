from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field
from backoffice.models.purchase_order import PurchaseOrderStatus

class PurchaseOrderItemCreate(BaseModel):
    packaging_id: UUID
    quantity: int = Field(..., gt=0)
    unit_cost: float = Field(..., ge=0)
    supplier: Optional[str] = None
    notes: Optional[str] = None

class PackagingRef(BaseModel):
    id: UUID
    name: str
    type: str

    class Config:
        from_attributes = True

class PurchaseOrderItem(BaseModel):
    id: UUID
    packaging_id: UUID
    quantity: int
    unit_cost: float
    total_cost: float
    supplier: Optional[str] = None
    notes: Optional[str] = None
    packaging: Optional[PackagingRef] = None

    class Config:
        from_attributes = True

class PurchaseOrderCreate(BaseModel):
    supplier: Optional[str] = None
    notes: Optional[str] = None
    expected_delivery: Optional[date] = None
    items: List[PurchaseOrderItemCreate] = Field(..., min_length=1)

class PurchaseOrderUpdate(BaseModel):
    status: Optional[PurchaseOrderStatus] = None
    supplier: Optional[str] = None
    notes: Optional[str] = None
    expected_delivery: Optional[date] = None
    actual_delivery: Optional[date] = None

class PurchaseOrder(BaseModel):
    id: UUID
    po_number: str
    status: PurchaseOrderStatus
    total_cost: float
    supplier: Optional[str] = None
    notes: Optional[str] = None
    expected_delivery: Optional[date] = None
    actual_delivery: Optional[date] = None
    items: List[PurchaseOrderItem] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
