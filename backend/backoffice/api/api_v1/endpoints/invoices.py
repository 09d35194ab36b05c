from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.crud import crud_invoice
from backoffice.models.user import User
from backoffice.schemas.common import Message, page_meta
from backoffice.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    Invoice as InvoiceSchema,
    InvoiceList
)

router = APIRouter()

@router.get("/", response_model=InvoiceList)
def get_invoices(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    supplier: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Invoice list"""
    items, total = crud_invoice.get_invoices(
        db, current_user.id,
        skip=(page - 1) * limit, limit=limit,
        search=search, supplier=supplier,
    )
    return InvoiceList(items=items, **page_meta(total, page, limit))

@router.post("/", response_model=InvoiceSchema, status_code=status.HTTP_201_CREATED)
def create_invoice(
    invoice_in: InvoiceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create an invoice"""
    if crud_invoice.get_invoice_by_number(db, current_user.id, invoice_in.invoice_number):
        raise HTTPException(status_code=400, detail="Invoice number already exists")
    return crud_invoice.create_invoice(db, current_user.id, invoice_in)

@router.get("/{invoice_id}", response_model=InvoiceSchema)
def get_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Invoice detail"""
    invoice = crud_invoice.get_invoice(db, current_user.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice

@router.put("/{invoice_id}", response_model=InvoiceSchema)
def update_invoice(
    invoice_id: UUID,
    invoice_in: InvoiceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update an invoice; the invoice number is fixed once created"""
    invoice = crud_invoice.get_invoice(db, current_user.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    if invoice_in.invoice_number != invoice.invoice_number:
        raise HTTPException(status_code=400, detail="Invoice number cannot be changed")
    return crud_invoice.update_invoice(db, invoice, invoice_in)

@router.delete("/{invoice_id}", response_model=Message)
def delete_invoice(
    invoice_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Delete an invoice (linked expenses keep their data, the link is cleared)"""
    invoice = crud_invoice.get_invoice(db, current_user.id, invoice_id)
    if not invoice:
        raise HTTPException(status_code=404, detail="Invoice not found")
    crud_invoice.delete_invoice(db, invoice)
    return {"message": "Invoice deleted successfully"}
