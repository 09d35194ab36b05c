from typing import Optional, List
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, model_validator
from backoffice.models.product import FulfillmentType
from backoffice.schemas.common import PageMeta
from backoffice.schemas.inventory import Replenishment, ReplenishmentCreate

class ProductBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    sku: Optional[str] = None

class ProductCreate(ProductBase):
    unit_cost: float = Field(..., gt=0)
    quantity: int = Field(0, ge=0)
    cost: float = Field(0, ge=0)
    shipping: float = Field(0, ge=0)
    vat: float = Field(0, ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    type: FulfillmentType = FulfillmentType.FBA
    linked_packaging: Optional[UUID] = None
    packaging_cost: float = Field(0, ge=0)
    misc_cost: float = Field(0, ge=0)

    @model_validator(mode='after')
    def check_fbm_packaging(self):
        if self.type == FulfillmentType.FBM and not self.linked_packaging:
            raise ValueError("Packaging is required for FBM products")
        return self

class ProductUpdate(ProductBase):
    quantity: int = Field(..., gt=0)
    cost: float = Field(..., gt=0)
    shipping: float = Field(0, ge=0)
    vat: float = Field(0, ge=0)
    total_cost: Optional[float] = Field(None, ge=0)
    type: FulfillmentType
    linked_packaging: Optional[UUID] = None
    packaging_cost: float = Field(0, ge=0)
    misc_cost: float = Field(0, ge=0)
    unit_cost: Optional[float] = Field(None, gt=0)

    @model_validator(mode='after')
    def check_fbm_packaging(self):
        if self.type == FulfillmentType.FBM and not self.linked_packaging:
            raise ValueError("Packaging is required for FBM products")
        return self

class Product(ProductBase):
    id: UUID
    quantity: Optional[int] = None
    cost: Optional[float] = None
    shipping: Optional[float] = None
    vat: Optional[float] = None
    total_cost: Optional[float] = None
    type: FulfillmentType
    linked_packaging: Optional[UUID] = None
    packaging_cost: Optional[float] = None
    misc_cost: Optional[float] = None
    current_quantity: int
    unit_cost: float
    total_cog: float
    is_active: bool
    last_replenishment: Optional[Replenishment] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ProductDetail(Product):
    replenishments: List[Replenishment] = []

class ProductList(PageMeta):
    items: List[Product]

class ProductReplenishCreate(ReplenishmentCreate):
    pass

class ProductStock(BaseModel):
    id: UUID
    current_quantity: int
    unit_cost: float
    total_cog: float

    class Config:
        from_attributes = True

class ProductReplenishResult(BaseModel):
    message: str
    replenishment: Replenishment
    product: ProductStock
