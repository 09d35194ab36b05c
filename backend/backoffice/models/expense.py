from sqlalchemy import Column, String, Date, ForeignKey, Text, Numeric, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import BaseModel

class Expense(BaseModel):
    __tablename__ = "expenses"
    __table_args__ = (
        UniqueConstraint('user_id', 'expense_id', name='uix_user_expense_id'),
    )

    expense_id = Column(String(100), nullable=False, index=True)  # business id, e.g. EXP-001
    invoice_id = Column(UUID(as_uuid=True), ForeignKey("invoices.id", ondelete="SET NULL"), nullable=True)
    item_name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    cost = Column(Numeric(12, 2), nullable=False)
    shipping_cost = Column(Numeric(12, 2), default=0)
    vat = Column(Numeric(12, 2), default=0)
    total_cost = Column(Numeric(12, 2), nullable=False)
    unit_price = Column(Numeric(12, 4), nullable=False)
    date = Column(Date, nullable=False)
    comment = Column(Text)
    po_number = Column(String(50), index=True)
    supplier = Column(String(200))
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    user = relationship("User", back_populates="expenses")
    invoice = relationship("Invoice", back_populates="expenses")
