from sqlalchemy import Column, String, Date, ForeignKey, Text, Numeric, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import BaseModel

class Invoice(BaseModel):
    __tablename__ = "invoices"
    __table_args__ = (
        UniqueConstraint('user_id', 'invoice_number', name='uix_user_invoice_number'),
    )

    invoice_number = Column(String(100), nullable=False, index=True)
    supplier_name = Column(String(200), nullable=False)
    supplier_url = Column(String(500))
    date = Column(Date, nullable=False)
    total_amount = Column(Numeric(12, 2))
    pdf_link = Column(String(500), nullable=False)
    comments = Column(Text)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # relationships
    user = relationship("User", back_populates="invoices")
    expenses = relationship("Expense", back_populates="invoice")
