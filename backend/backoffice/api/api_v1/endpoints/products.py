import logging
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.crud import crud_product, crud_expense
from backoffice.models.user import User
from backoffice.schemas.common import Message, page_meta
from backoffice.schemas.product import (
    ProductCreate,
    ProductUpdate,
    Product as ProductSchema,
    ProductDetail,
    ProductList,
    ProductReplenishCreate,
    ProductReplenishResult,
)
from backoffice.services.replenishment import replenish_product

logger = logging.getLogger(__name__)

router = APIRouter()

def _check_packaging(db: Session, user: User, packaging_id: Optional[UUID]) -> None:
    if packaging_id and not crud_product.packaging_belongs_to_user(db, user.id, packaging_id):
        raise HTTPException(status_code=400, detail="Packaging not found")

@router.get("/", response_model=ProductList)
def get_products(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Active products"""
    items, total = crud_product.get_products(
        db, current_user.id, skip=(page - 1) * limit, limit=limit, search=search
    )
    return ProductList(items=items, **page_meta(total, page, limit))

@router.post("/", response_model=ProductSchema, status_code=status.HTTP_201_CREATED)
def create_product(
    product_in: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create a product"""
    _check_packaging(db, current_user, product_in.linked_packaging)
    return crud_product.create_product(db, current_user.id, product_in)

@router.get("/{product_id}", response_model=ProductDetail)
def get_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Product with replenishment history"""
    product = crud_product.get_product(db, current_user.id, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.put("/{product_id}", response_model=ProductSchema)
def update_product(
    product_id: UUID,
    product_in: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Update a product"""
    product = crud_product.get_product(db, current_user.id, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    _check_packaging(db, current_user, product_in.linked_packaging)
    return crud_product.update_product(db, product, product_in)

@router.delete("/{product_id}", response_model=Message)
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Deactivate a product"""
    product = crud_product.get_product(db, current_user.id, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    crud_product.deactivate_product(db, product)
    return {"message": "Product deleted successfully"}

@router.post(
    "/{product_id}/replenish",
    response_model=ProductReplenishResult,
    status_code=status.HTTP_201_CREATED
)
def replenish(
    product_id: UUID,
    replenish_in: ProductReplenishCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Add stock and recalculate COG"""
    product = crud_product.get_product(db, current_user.id, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    if replenish_in.expense_id and not crud_expense.get_expense(db, current_user.id, replenish_in.expense_id):
        raise HTTPException(status_code=400, detail="Expense not found")

    try:
        replenishment = replenish_product(
            db, product, current_user.id,
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
        logger.exception("Replenishment of product %s failed", product_id)
        raise

    db.refresh(replenishment)
    db.refresh(product)
    return {
        "message": "Product replenished successfully",
        "replenishment": replenishment,
        "product": product,
    }
