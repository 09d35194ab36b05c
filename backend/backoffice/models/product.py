from sqlalchemy import Column, String, Integer, ForeignKey, Text, Numeric, Boolean, Date, Enum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel

class FulfillmentType(str, enum.Enum):
    FBA = "FBA"
    FBM = "FBM"

class Product(BaseModel):
    __tablename__ = "products"

    name = Column(String(200), nullable=False)
    description = Column(Text)
    sku = Column(String(100), index=True)
    quantity = Column(Integer, default=0)
    cost = Column(Numeric(12, 2), default=0)
    shipping = Column(Numeric(12, 2), default=0)
    vat = Column(Numeric(12, 2), default=0)
    total_cost = Column(Numeric(12, 2), default=0)
    type = Column(Enum(FulfillmentType), default=FulfillmentType.FBA, nullable=False)
    linked_packaging = Column(UUID(as_uuid=True), ForeignKey("packaging.id", ondelete="SET NULL"), nullable=True)
    packaging_cost = Column(Numeric(12, 2), default=0)
    misc_cost = Column(Numeric(12, 2), default=0)
    current_quantity = Column(Integer, default=0, nullable=False)
    unit_cost = Column(Numeric(12, 4), nullable=False)
    total_cog = Column(Numeric(14, 2), default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    user = relationship("User", back_populates="products")
    packaging = relationship("Packaging")
    replenishments = relationship(
        "ProductReplenishment",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductReplenishment.created_at.desc()",
    )

    @property
    def last_replenishment(self):
        """Most recent replenishment, if any"""
        return self.replenishments[0] if self.replenishments else None

class ProductReplenishment(BaseModel):
    __tablename__ = "product_replenishments"

    quantity = Column(Integer, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    unit_cost = Column(Numeric(12, 4), nullable=False)
    date = Column(Date, nullable=False)
    invoice_link = Column(String(500))
    comments = Column(Text)
    product_id = Column(UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    expense_id = Column(UUID(as_uuid=True), ForeignKey("expenses.id", ondelete="SET NULL"), nullable=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    product = relationship("Product", back_populates="replenishments")
    expense = relationship("Expense")
