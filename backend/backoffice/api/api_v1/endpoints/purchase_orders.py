import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, selectinload
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.models.purchase_order import PurchaseOrder, PurchaseOrderItem, PurchaseOrderStatus
from backoffice.models.user import User
from backoffice.schemas.common import Message
from backoffice.schemas.purchase_order import (
    PurchaseOrderCreate,
    PurchaseOrderUpdate,
    PurchaseOrder as PurchaseOrderSchema,
)
from backoffice.services.purchase_order_service import (
    PurchaseOrderError,
    create_purchase_order,
    update_purchase_order,
)

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_order(db: Session, user: User, order_id: UUID) -> PurchaseOrder:
    order = db.query(PurchaseOrder).options(
        selectinload(PurchaseOrder.items).joinedload(PurchaseOrderItem.packaging)
    ).filter(
        PurchaseOrder.id == order_id,
        PurchaseOrder.user_id == user.id
    ).first()
    if not order:
        raise HTTPException(status_code=404, detail="Purchase order not found")
    return order

@router.get("/", response_model=List[PurchaseOrderSchema])
def get_purchase_orders(
    status_filter: str = Query("all", alias="status"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Purchase orders, newest first; status=all or one status"""
    query = db.query(PurchaseOrder).options(
        selectinload(PurchaseOrder.items).joinedload(PurchaseOrderItem.packaging)
    ).filter(PurchaseOrder.user_id == current_user.id)

    if status_filter and status_filter.lower() != "all":
        try:
            query = query.filter(PurchaseOrder.status == PurchaseOrderStatus(status_filter.upper()))
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid status")

    return query.order_by(PurchaseOrder.created_at.desc()).all()

@router.post("/", response_model=PurchaseOrderSchema, status_code=status.HTTP_201_CREATED)
def create_order(
    order_in: PurchaseOrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create a purchase order and its lines"""
    try:
        order = create_purchase_order(db, current_user.id, order_in)
        db.commit()
    except PurchaseOrderError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        logger.exception("Purchase order creation failed")
        raise

    return _get_order(db, current_user, order.id)

@router.get("/{order_id}", response_model=PurchaseOrderSchema)
def get_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Purchase order detail"""
    return _get_order(db, current_user, order_id)

@router.put("/{order_id}", response_model=PurchaseOrderSchema)
def update_order(
    order_id: UUID,
    order_in: PurchaseOrderUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update status / dates / notes; RECEIVED books stock and expenses"""
    order = _get_order(db, current_user, order_id)
    try:
        update_purchase_order(db, order, order_in)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Purchase order %s update failed", order_id)
        raise

    return _get_order(db, current_user, order_id)

@router.delete("/{order_id}", response_model=Message)
def delete_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Delete a purchase order and its lines"""
    order = _get_order(db, current_user, order_id)
    db.delete(order)
    db.commit()
    return {"message": "Purchase order deleted successfully"}
