from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload
from sqlalchemy import or_

from backoffice.models.packaging import Packaging
from backoffice.models.product import Product, ProductReplenishment
from backoffice.schemas.product import ProductCreate, ProductUpdate
from backoffice.utils.numbers import to_decimal


def get_products(
    db: Session,
    user_id: UUID,
    skip: int = 0,
    limit: int = 10,
    search: Optional[str] = None,
) -> tuple[list[Product], int]:
    """Active products (search over name, description, sku)"""
    query = db.query(Product).filter(
        Product.user_id == user_id,
        Product.is_active == True
    )

    if search:
        query = query.filter(
            or_(
                Product.name.ilike(f"%{search}%"),
                Product.description.ilike(f"%{search}%"),
                Product.sku.ilike(f"%{search}%"),
            )
        )

    total = query.count()
    items = query.options(selectinload(Product.replenishments)).order_by(
        Product.created_at.desc()
    ).offset(skip).limit(limit).all()

    return items, total


def get_product(db: Session, user_id: UUID, product_id: UUID) -> Optional[Product]:
    return db.query(Product).options(
        selectinload(Product.replenishments).joinedload(ProductReplenishment.expense)
    ).filter(
        Product.id == product_id,
        Product.user_id == user_id,
        Product.is_active == True
    ).first()


def packaging_belongs_to_user(db: Session, user_id: UUID, packaging_id: UUID) -> bool:
    return db.query(Packaging.id).filter(
        Packaging.id == packaging_id,
        Packaging.user_id == user_id
    ).first() is not None


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if value and value.strip() else None


def create_product(db: Session, user_id: UUID, obj_in: ProductCreate) -> Product:
    cost = to_decimal(obj_in.cost)
    shipping = to_decimal(obj_in.shipping)
    vat = to_decimal(obj_in.vat)
    unit_cost = to_decimal(obj_in.unit_cost)

    product = Product(
        name=obj_in.name.strip(),
        description=_clean(obj_in.description),
        sku=_clean(obj_in.sku),
        quantity=obj_in.quantity,
        cost=cost,
        shipping=shipping,
        vat=vat,
        total_cost=(
            to_decimal(obj_in.total_cost)
            if obj_in.total_cost is not None
            else cost + shipping + vat
        ),
        type=obj_in.type,
        linked_packaging=obj_in.linked_packaging,
        packaging_cost=to_decimal(obj_in.packaging_cost),
        misc_cost=to_decimal(obj_in.misc_cost),
        current_quantity=0,
        unit_cost=unit_cost,
        # COG tracks stock on hand, which starts empty
        total_cog=0,
        is_active=True,
        user_id=user_id,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def update_product(db: Session, product: Product, obj_in: ProductUpdate) -> Product:
    cost = to_decimal(obj_in.cost)
    shipping = to_decimal(obj_in.shipping)
    vat = to_decimal(obj_in.vat)

    product.name = obj_in.name.strip()
    product.description = _clean(obj_in.description)
    product.sku = _clean(obj_in.sku)
    product.quantity = obj_in.quantity
    product.cost = cost
    product.shipping = shipping
    product.vat = vat
    product.total_cost = (
        to_decimal(obj_in.total_cost)
        if obj_in.total_cost is not None
        else cost + shipping + vat
    )
    product.type = obj_in.type
    product.linked_packaging = obj_in.linked_packaging
    product.packaging_cost = to_decimal(obj_in.packaging_cost)
    product.misc_cost = to_decimal(obj_in.misc_cost)
    if obj_in.unit_cost is not None:
        product.unit_cost = to_decimal(obj_in.unit_cost)

    db.commit()
    db.refresh(product)
    return product


def deactivate_product(db: Session, product: Product) -> None:
    product.is_active = False
    db.commit()
