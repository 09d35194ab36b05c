from sqlalchemy import Column, String, ForeignKey, Text, Numeric, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel

class Marketplace(str, enum.Enum):
    ebay = "ebay"
    amazon = "amazon"

class Plan(BaseModel):
    """Sourcing plan: a candidate product and its expected margin on a marketplace"""
    __tablename__ = "plans"

    product_name = Column(String(200), nullable=False)
    ean = Column(String(50))
    unit_price = Column(Numeric(12, 2), nullable=False)
    sell_price = Column(Numeric(12, 2), nullable=False)
    source_link = Column(Text, nullable=False)
    sold_items = Column(Integer, default=0)
    shipping_charges = Column(Numeric(12, 2), default=0)
    shipping_cost = Column(Numeric(12, 2), default=0)
    status = Column(String(50), nullable=False)
    profit = Column(Numeric(12, 2), default=0)
    marketplace = Column(String(20), nullable=False, default=Marketplace.ebay.value)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    user = relationship("User", back_populates="plans")
    ebay_details = relationship("EbayPlanDetails", back_populates="plan", uselist=False, cascade="all, delete-orphan")
    amazon_details = relationship("AmazonPlanDetails", back_populates="plan", uselist=False, cascade="all, delete-orphan")

class EbayPlanDetails(BaseModel):
    __tablename__ = "ebay_plan_details"

    plan_id = Column(UUID(as_uuid=True), ForeignKey("plans.id", ondelete="CASCADE"), unique=True, nullable=False)
    product_link = Column(Text)
    vat = Column(Numeric(5, 2), default=0)
    ebay_commission = Column(Numeric(5, 2), default=15)
    advertising_percentage = Column(Numeric(5, 2), default=0)

    plan = relationship("Plan", back_populates="ebay_details")

class AmazonPlanDetails(BaseModel):
    __tablename__ = "amazon_plan_details"

    plan_id = Column(UUID(as_uuid=True), ForeignKey("plans.id", ondelete="CASCADE"), unique=True, nullable=False)
    fulfillment_cost = Column(Numeric(12, 2), default=0)
    fee_per_item = Column(Numeric(12, 2), default=0)
    storage_fees = Column(Numeric(12, 2), default=0)
    fulfillment_type = Column(String(10), default="FBA")

    plan = relationship("Plan", back_populates="amazon_details")
