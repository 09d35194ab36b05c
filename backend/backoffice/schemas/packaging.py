from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field
from backoffice.schemas.common import CamelRequest, PageMeta
from backoffice.schemas.inventory import ExpenseSummary

class PackagingBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    type: str = Field(..., min_length=1)
    unit_cost: float = Field(..., gt=0)

class PackagingCreate(PackagingBase):
    linked_products: List[str] = []

class PackagingUpdate(PackagingBase):
    quantity: Optional[int] = Field(None, ge=0)
    cost: Optional[float] = Field(None, ge=0)
    shipping: Optional[float] = Field(None, ge=0)
    vat: Optional[float] = Field(None, ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    linked_products: Optional[List[str]] = None

class PackagingReplenishCreate(CamelRequest):
    quantity: int = Field(..., gt=0)
    cost: float = Field(..., ge=0)
    shipping: float = Field(..., ge=0)
    vat: float = Field(..., ge=0)
    total_cost: Optional[float] = Field(None, ge=0)  # defaults to cost + shipping + vat
    unit_cost: Optional[float] = Field(None, ge=0)  # defaults to total / quantity
    date: date
    invoice_link: Optional[str] = None
    comments: Optional[str] = None
    expense_id: Optional[UUID] = None

class PackagingReplenishment(BaseModel):
    id: UUID
    quantity: int
    cost: float
    shipping: float
    vat: float
    total_cost: float
    unit_cost: float
    date: date
    invoice_link: Optional[str] = None
    comments: Optional[str] = None
    expense_id: Optional[UUID] = None
    expense: Optional[ExpenseSummary] = None
    created_at: datetime

    class Config:
        from_attributes = True

class Packaging(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    type: str
    quantity: Optional[int] = None
    cost: Optional[float] = None
    shipping: Optional[float] = None
    vat: Optional[float] = None
    total_cost: Optional[float] = None
    current_quantity: int
    unit_cost: float
    total_cog: float
    linked_products: Optional[List[str]] = None
    is_active: bool
    last_replenishment: Optional[PackagingReplenishment] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class PackagingDetail(Packaging):
    replenishments: List[PackagingReplenishment] = []

class PackagingList(PageMeta):
    items: List[Packaging]

class PackagingReplenishResult(BaseModel):
    message: str
    replenishment: PackagingReplenishment
    packaging: Packaging
