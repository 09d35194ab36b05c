from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import or_

from backoffice.models.packaging import Packaging, PackagingReplenishment
from backoffice.schemas.packaging import PackagingCreate, PackagingUpdate
from backoffice.utils.numbers import to_decimal


def get_packaging_list(
    db: Session,
    user_id: UUID,
    skip: int = 0,
    limit: int = 10,
    search: Optional[str] = None,
) -> tuple[list[Packaging], int]:
    """Active packaging (search over name, description, type)"""
    query = db.query(Packaging).filter(
        Packaging.user_id == user_id,
        Packaging.is_active == True
    )

    if search:
        query = query.filter(
            or_(
                Packaging.name.ilike(f"%{search}%"),
                Packaging.description.ilike(f"%{search}%"),
                Packaging.type.ilike(f"%{search}%"),
            )
        )

    total = query.count()
    items = query.options(selectinload(Packaging.replenishments)).order_by(
        Packaging.created_at.desc()
    ).offset(skip).limit(limit).all()

    return items, total


def get_packaging(db: Session, user_id: UUID, packaging_id: UUID) -> Optional[Packaging]:
    return db.query(Packaging).options(
        selectinload(Packaging.replenishments).joinedload(PackagingReplenishment.expense)
    ).filter(
        Packaging.id == packaging_id,
        Packaging.user_id == user_id,
        Packaging.is_active == True
    ).first()


def create_packaging(db: Session, user_id: UUID, obj_in: PackagingCreate) -> Packaging:
    packaging = Packaging(
        name=obj_in.name.strip(),
        description=obj_in.description.strip() if obj_in.description else None,
        type=obj_in.type.strip(),
        unit_cost=to_decimal(obj_in.unit_cost),
        current_quantity=0,
        total_cog=0,
        linked_products=obj_in.linked_products,
        is_active=True,
        user_id=user_id,
    )
    db.add(packaging)
    db.commit()
    db.refresh(packaging)
    return packaging


def update_packaging(db: Session, packaging: Packaging, obj_in: PackagingUpdate) -> Packaging:
    packaging.name = obj_in.name.strip()
    packaging.description = obj_in.description.strip() if obj_in.description else None
    packaging.type = obj_in.type.strip()
    packaging.unit_cost = to_decimal(obj_in.unit_cost)
    # purchase fields are optional and cleared when omitted
    packaging.quantity = obj_in.quantity
    packaging.cost = to_decimal(obj_in.cost) if obj_in.cost is not None else None
    packaging.shipping = to_decimal(obj_in.shipping) if obj_in.shipping is not None else None
    packaging.vat = to_decimal(obj_in.vat) if obj_in.vat is not None else None
    packaging.total_cost = to_decimal(obj_in.total_cost) if obj_in.total_cost is not None else None
    if obj_in.linked_products is not None:
        packaging.linked_products = obj_in.linked_products

    db.commit()
    db.refresh(packaging)
    return packaging


def deactivate_packaging(db: Session, packaging: Packaging) -> None:
    packaging.is_active = False
    db.commit()
