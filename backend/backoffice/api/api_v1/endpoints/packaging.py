import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.crud import crud_packaging, crud_expense
from backoffice.models.user import User
from backoffice.schemas.common import Message, page_meta
from backoffice.schemas.packaging import (
    PackagingCreate,
    PackagingUpdate,
    Packaging as PackagingSchema,
    PackagingDetail,
    PackagingList,
    PackagingReplenishCreate,
    PackagingReplenishResult,
)
from backoffice.services.replenishment import replenish_packaging

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/", response_model=PackagingList)
def get_packaging_list(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Active packaging"""
    items, total = crud_packaging.get_packaging_list(
        db, current_user.id, skip=(page - 1) * limit, limit=limit, search=search
    )
    return PackagingList(items=items, **page_meta(total, page, limit))

@router.post("/", response_model=PackagingSchema, status_code=status.HTTP_201_CREATED)
def create_packaging(
    packaging_in: PackagingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create packaging"""
    return crud_packaging.create_packaging(db, current_user.id, packaging_in)

@router.get("/{packaging_id}", response_model=PackagingDetail)
def get_packaging(
    packaging_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Packaging with replenishment history"""
    packaging = crud_packaging.get_packaging(db, current_user.id, packaging_id)
    if not packaging:
        raise HTTPException(status_code=404, detail="Packaging not found")
    return packaging

@router.put("/{packaging_id}", response_model=PackagingSchema)
def update_packaging(
    packaging_id: UUID,
    packaging_in: PackagingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update packaging"""
    packaging = crud_packaging.get_packaging(db, current_user.id, packaging_id)
    if not packaging:
        raise HTTPException(status_code=404, detail="Packaging not found")
    return crud_packaging.update_packaging(db, packaging, packaging_in)

@router.delete("/{packaging_id}", response_model=Message)
def delete_packaging(
    packaging_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Deactivate packaging"""
    packaging = crud_packaging.get_packaging(db, current_user.id, packaging_id)
    if not packaging:
        raise HTTPException(status_code=404, detail="Packaging not found")
    crud_packaging.deactivate_packaging(db, packaging)
    return {"message": "Packaging deleted successfully"}

@router.post(
    "/{packaging_id}/replenish",
    response_model=PackagingReplenishResult,
    status_code=status.HTTP_201_CREATED
)
def replenish(
    packaging_id: UUID,
    replenish_in: PackagingReplenishCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Add stock and update the average unit cost"""
    packaging = crud_packaging.get_packaging(db, current_user.id, packaging_id)
    if not packaging:
        raise HTTPException(status_code=404, detail="Packaging not found")
    if replenish_in.expense_id and not crud_expense.get_expense(db, current_user.id, replenish_in.expense_id):
        raise HTTPException(status_code=400, detail="Expense not found")

    try:
        replenishment = replenish_packaging(
            db, packaging, current_user.id,
            quantity=replenish_in.quantity,
            cost=replenish_in.cost,
            shipping=replenish_in.shipping,
            vat=replenish_in.vat,
            total_cost=replenish_in.total_cost,
            unit_cost=replenish_in.unit_cost,
            replenished_on=replenish_in.date,
            invoice_link=replenish_in.invoice_link,
            comments=replenish_in.comments,
            expense_id=replenish_in.expense_id,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Replenishment of packaging %s failed", packaging_id)
        raise

    db.refresh(replenishment)
    db.refresh(packaging)
    return {
        "message": "Packaging replenished successfully",
        "replenishment": replenishment,
        "packaging": packaging,
    }
