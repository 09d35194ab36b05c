from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field
from backoffice.models.plan import Marketplace

class EbayPlanDetailsIn(BaseModel):
    product_link: Optional[str] = None
    vat: float = Field(0, ge=0)
    ebay_commission: float = Field(15, ge=0)
    advertising_percentage: float = Field(0, ge=0)

class EbayPlanDetailsOut(EbayPlanDetailsIn):
    class Config:
        from_attributes = True

class AmazonPlanDetailsIn(BaseModel):
    fulfillment_cost: float = Field(0, ge=0)
    fee_per_item: float = Field(0, ge=0)
    storage_fees: float = Field(0, ge=0)
    fulfillment_type: str = "FBA"

class AmazonPlanDetailsOut(AmazonPlanDetailsIn):
    class Config:
        from_attributes = True

class PlanBase(BaseModel):
    product_name: str = Field(..., min_length=1)
    ean: Optional[str] = None
    unit_price: float = Field(..., gt=0)
    sell_price: float = Field(..., gt=0)
    source_link: str = Field(..., min_length=1)
    sold_items: int = Field(0, ge=0)
    shipping_charges: float = Field(0, ge=0)
    shipping_cost: float = Field(0, ge=0)
    status: str = Field(..., min_length=1)
    marketplace: Marketplace = Marketplace.ebay

class PlanCreate(PlanBase):
    profit: Optional[float] = None  # computed when omitted
    ebay_details: Optional[EbayPlanDetailsIn] = None
    amazon_details: Optional[AmazonPlanDetailsIn] = None

class PlanUpdate(PlanCreate):
    pass

class Plan(PlanBase):
    id: UUID
    profit: float
    ebay_details: Optional[EbayPlanDetailsOut] = None
    amazon_details: Optional[AmazonPlanDetailsOut] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class ProfitInput(BaseModel):
    marketplace: Marketplace = Marketplace.ebay
    unit_price: float = Field(..., ge=0)
    sell_price: float = Field(..., ge=0)
    shipping_charges: float = Field(0, ge=0)
    shipping_cost: float = Field(0, ge=0)
    vat: float = Field(0, ge=0)
    ebay_commission: float = Field(15, ge=0)
    advertising_percentage: float = Field(0, ge=0)
    fulfillment_cost: float = Field(0, ge=0)

class ProfitBreakdown(BaseModel):
    total_revenue: float
    net_revenue: float
    vat_amount: float
    marketplace_fee: float
    total_costs: float
    profit: float
    margin: float
