import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.crud import crud_inventory, crud_expense
from backoffice.models.user import User
from backoffice.schemas.common import Message, page_meta
from backoffice.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryItem as InventoryItemSchema,
    InventoryItemDetail,
    InventoryItemList,
    ReplenishmentCreate,
    InventoryReplenishResult,
)
from backoffice.services.replenishment import replenish_inventory_item

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/", response_model=InventoryItemList)
def get_inventory_items(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Active inventory items with their latest replenishment"""
    items, total = crud_inventory.get_items(
        db, current_user.id, skip=(page - 1) * limit, limit=limit, search=search
    )
    return InventoryItemList(items=items, **page_meta(total, page, limit))

@router.post("/", response_model=InventoryItemSchema, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    item_in: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create an inventory item (stock starts at zero)"""
    return crud_inventory.create_item(db, current_user.id, item_in)

@router.get("/{item_id}", response_model=InventoryItemDetail)
def get_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Inventory item with full replenishment history"""
    item = crud_inventory.get_item(db, current_user.id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return item

@router.put("/{item_id}", response_model=InventoryItemSchema)
def update_inventory_item(
    item_id: UUID,
    item_in: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update an inventory item"""
    item = crud_inventory.get_item(db, current_user.id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    return crud_inventory.update_item(db, item, item_in)

@router.delete("/{item_id}", response_model=Message)
def delete_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Deactivate an inventory item"""
    item = crud_inventory.get_item(db, current_user.id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    crud_inventory.deactivate_item(db, item)
    return {"message": "Inventory item deleted successfully"}

@router.post(
    "/{item_id}/replenish",
    response_model=InventoryReplenishResult,
    status_code=status.HTTP_201_CREATED
)
def replenish_item(
    item_id: UUID,
    replenish_in: ReplenishmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Record a replenishment and add it to stock"""
    item = crud_inventory.get_item(db, current_user.id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    if replenish_in.expense_id and not crud_expense.get_expense(db, current_user.id, replenish_in.expense_id):
        raise HTTPException(status_code=400, detail="Expense not found")

    try:
        replenishment = replenish_inventory_item(
            db, item, current_user.id,
            quantity=replenish_in.quantity,
            cost=replenish_in.cost,
            replenished_on=replenish_in.date,
            invoice_link=replenish_in.invoice_link,
            comments=replenish_in.comments,
            expense_id=replenish_in.expense_id,
        )
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Replenishment of inventory item %s failed", item_id)
        raise

    db.refresh(replenishment)
    db.refresh(item)
    return {
        "message": "Inventory item replenished successfully",
        "replenishment": replenishment,
        "inventory_item": item,
    }
