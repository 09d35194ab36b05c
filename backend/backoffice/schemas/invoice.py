from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from pydantic import BaseModel, Field
from backoffice.schemas.common import PageMeta

class InvoiceBase(BaseModel):
    invoice_number: str = Field(..., min_length=1)
    supplier_name: str = Field(..., min_length=1)
    supplier_url: Optional[str] = None
    date: date
    total_amount: Optional[float] = Field(None, ge=0)
    pdf_link: str = Field(..., min_length=1)
    comments: Optional[str] = None

class InvoiceCreate(InvoiceBase):
    pass

class InvoiceUpdate(InvoiceBase):
    pass

class Invoice(InvoiceBase):
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class InvoiceList(PageMeta):
    items: List[Invoice]
