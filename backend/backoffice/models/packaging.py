from sqlalchemy import Column, String, Integer, ForeignKey, Text, Numeric, Boolean, Date, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import BaseModel

class Packaging(BaseModel):
    __tablename__ = "packaging"

    name = Column(String(200), nullable=False)
    description = Column(Text)
    type = Column(String(100), nullable=False)
    quantity = Column(Integer)
    cost = Column(Numeric(12, 2))
    shipping = Column(Numeric(12, 2))
    vat = Column(Numeric(12, 2))
    total_cost = Column(Numeric(14, 2))
    current_quantity = Column(Integer, default=0, nullable=False)
    unit_cost = Column(Numeric(12, 4), nullable=False)
    total_cog = Column(Numeric(14, 2), default=0, nullable=False)
    linked_products = Column(JSON, default=list)
    is_active = Column(Boolean, default=True, nullable=False)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    user = relationship("User", back_populates="packaging_items")
    replenishments = relationship(
        "PackagingReplenishment",
        back_populates="packaging",
        cascade="all, delete-orphan",
        order_by="PackagingReplenishment.created_at.desc()",
    )

    @property
    def last_replenishment(self):
        """Most recent replenishment, if any"""
        return self.replenishments[0] if self.replenishments else None

class PackagingReplenishment(BaseModel):
    __tablename__ = "packaging_replenishments"

    quantity = Column(Integer, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    shipping = Column(Numeric(12, 2), default=0, nullable=False)
    vat = Column(Numeric(12, 2), default=0, nullable=False)
    total_cost = Column(Numeric(14, 2), nullable=False)
    unit_cost = Column(Numeric(12, 4), nullable=False)
    date = Column(Date, nullable=False)
    invoice_link = Column(String(500))
    comments = Column(Text)
    packaging_id = Column(UUID(as_uuid=True), ForeignKey("packaging.id", ondelete="CASCADE"), nullable=False)
    expense_id = Column(UUID(as_uuid=True), ForeignKey("expenses.id", ondelete="SET NULL"), nullable=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    packaging = relationship("Packaging", back_populates="replenishments")
    expense = relationship("Expense")
