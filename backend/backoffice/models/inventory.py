from sqlalchemy import Column, String, Integer, ForeignKey, Text, Numeric, Boolean, Date, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import BaseModel

class InventoryItem(BaseModel):
    __tablename__ = "inventory_items"

    name = Column(String(200), nullable=False)
    description = Column(Text)
    current_quantity = Column(Integer, default=0, nullable=False)
    unit_cost = Column(Numeric(12, 4), nullable=False)
    linked_products = Column(JSON, default=list)
    is_active = Column(Boolean, default=True, nullable=False)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    user = relationship("User", back_populates="inventory_items")
    replenishments = relationship(
        "InventoryReplenishment",
        back_populates="inventory_item",
        cascade="all, delete-orphan",
        order_by="InventoryReplenishment.created_at.desc()",
    )

    @property
    def last_replenishment(self):
        """Most recent replenishment, if any"""
        return self.replenishments[0] if self.replenishments else None

class InventoryReplenishment(BaseModel):
    __tablename__ = "inventory_replenishments"

    quantity = Column(Integer, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    unit_cost = Column(Numeric(12, 4), nullable=False)
    date = Column(Date, nullable=False)
    invoice_link = Column(String(500))
    comments = Column(Text)
    inventory_item_id = Column(UUID(as_uuid=True), ForeignKey("inventory_items.id", ondelete="CASCADE"), nullable=False)
    expense_id = Column(UUID(as_uuid=True), ForeignKey("expenses.id", ondelete="SET NULL"), nullable=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    inventory_item = relationship("InventoryItem", back_populates="replenishments")
    expense = relationship("Expense")
