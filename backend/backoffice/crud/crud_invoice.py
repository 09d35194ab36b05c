from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session
from sqlalchemy import or_

from backoffice.models.invoice import Invoice
from backoffice.schemas.invoice import InvoiceCreate, InvoiceUpdate


def get_invoices(
    db: Session,
    user_id: UUID,
    skip: int = 0,
    limit: int = 10,
    search: Optional[str] = None,
    supplier: Optional[str] = None,
) -> tuple[list[Invoice], int]:
    """Invoice list (search + pagination)"""
    query = db.query(Invoice).filter(Invoice.user_id == user_id)

    if search:
        query = query.filter(
            or_(
                Invoice.invoice_number.ilike(f"%{search}%"),
                Invoice.supplier_name.ilike(f"%{search}%"),
                Invoice.comments.ilike(f"%{search}%"),
            )
        )
    if supplier:
        query = query.filter(Invoice.supplier_name.ilike(f"%{supplier}%"))

    total = query.count()
    items = query.order_by(Invoice.date.desc(), Invoice.created_at.desc()).offset(skip).limit(limit).all()

    return items, total


def get_invoice(db: Session, user_id: UUID, invoice_id: UUID) -> Optional[Invoice]:
    return db.query(Invoice).filter(
        Invoice.id == invoice_id,
        Invoice.user_id == user_id
    ).first()


def get_invoice_by_number(db: Session, user_id: UUID, invoice_number: str) -> Optional[Invoice]:
    return db.query(Invoice).filter(
        Invoice.invoice_number == invoice_number,
        Invoice.user_id == user_id
    ).first()


def create_invoice(db: Session, user_id: UUID, obj_in: InvoiceCreate) -> Invoice:
    invoice = Invoice(**obj_in.model_dump(), user_id=user_id)
    db.add(invoice)
    db.commit()
    db.refresh(invoice)
    return invoice


def update_invoice(db: Session, invoice: Invoice, obj_in: InvoiceUpdate) -> Invoice:
    for field, value in obj_in.model_dump(exclude={"invoice_number"}).items():
        setattr(invoice, field, value)
    db.commit()
    db.refresh(invoice)
    return invoice


def delete_invoice(db: Session, invoice: Invoice) -> None:
    db.delete(invoice)
    db.commit()
