from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field
from backoffice.schemas.common import CamelRequest, PageMeta

class ReplenishmentBase(CamelRequest):
    quantity: int = Field(..., gt=0)
    cost: float = Field(..., gt=0)
    date: date
    invoice_link: Optional[str] = None
    comments: Optional[str] = None
    expense_id: Optional[UUID] = None

class ReplenishmentCreate(ReplenishmentBase):
    pass

class ExpenseSummary(BaseModel):
    id: UUID
    expense_id: str
    item_name: str
    date: date

    class Config:
        from_attributes = True

class Replenishment(BaseModel):
    id: UUID
    quantity: int
    cost: float
    unit_cost: float
    date: date
    invoice_link: Optional[str] = None
    comments: Optional[str] = None
    expense_id: Optional[UUID] = None
    expense: Optional[ExpenseSummary] = None
    created_at: datetime

    class Config:
        from_attributes = True

class InventoryItemBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    unit_cost: float = Field(..., gt=0)
    linked_products: List[str] = []

class InventoryItemCreate(InventoryItemBase):
    pass

class InventoryItemUpdate(InventoryItemBase):
    pass

class InventoryItem(InventoryItemBase):
    id: UUID
    current_quantity: int
    is_active: bool
    last_replenishment: Optional[Replenishment] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class InventoryItemDetail(InventoryItem):
    replenishments: List[Replenishment] = []

class InventoryItemList(PageMeta):
    items: List[InventoryItem]

class InventoryStock(BaseModel):
    id: UUID
    current_quantity: int
    unit_cost: float

    class Config:
        from_attributes = True

class InventoryReplenishResult(BaseModel):
    message: str
    replenishment: Replenishment
    inventory_item: InventoryStock
