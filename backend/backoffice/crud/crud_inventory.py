from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import or_

from backoffice.models.inventory import InventoryItem, InventoryReplenishment
from backoffice.schemas.inventory import InventoryItemCreate, InventoryItemUpdate
from backoffice.utils.numbers import to_decimal


def get_items(
    db: Session,
    user_id: UUID,
    skip: int = 0,
    limit: int = 10,
    search: Optional[str] = None,
) -> tuple[list[InventoryItem], int]:
    """Active inventory items (search + pagination)"""
    query = db.query(InventoryItem).filter(
        InventoryItem.user_id == user_id,
        InventoryItem.is_active == True
    )

    if search:
        query = query.filter(
            or_(
                InventoryItem.name.ilike(f"%{search}%"),
                InventoryItem.description.ilike(f"%{search}%"),
            )
        )

    total = query.count()
    items = query.options(selectinload(InventoryItem.replenishments)).order_by(
        InventoryItem.created_at.desc()
    ).offset(skip).limit(limit).all()

    return items, total


def get_item(db: Session, user_id: UUID, item_id: UUID) -> Optional[InventoryItem]:
    return db.query(InventoryItem).options(
        selectinload(InventoryItem.replenishments).joinedload(InventoryReplenishment.expense)
    ).filter(
        InventoryItem.id == item_id,
        InventoryItem.user_id == user_id,
        InventoryItem.is_active == True
    ).first()


def create_item(db: Session, user_id: UUID, obj_in: InventoryItemCreate) -> InventoryItem:
    item = InventoryItem(
        name=obj_in.name.strip(),
        description=obj_in.description.strip() if obj_in.description else None,
        unit_cost=to_decimal(obj_in.unit_cost),
        linked_products=obj_in.linked_products,
        current_quantity=0,
        is_active=True,
        user_id=user_id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_item(db: Session, item: InventoryItem, obj_in: InventoryItemUpdate) -> InventoryItem:
    item.name = obj_in.name.strip()
    item.description = obj_in.description.strip() if obj_in.description else None
    item.unit_cost = to_decimal(obj_in.unit_cost)
    item.linked_products = obj_in.linked_products
    db.commit()
    db.refresh(item)
    return item


def deactivate_item(db: Session, item: InventoryItem) -> None:
    """Soft delete: replenishment history is kept"""
    item.is_active = False
    db.commit()
