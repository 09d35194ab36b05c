from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_admin_user
from backoffice.crud.crud_user import user_crud
from backoffice.models.user import User, UserRole
from backoffice.schemas.user import UserCreate, UserUpdate, User as UserSchema

router = APIRouter()

@router.get("/", response_model=List[UserSchema])
def get_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """List users (admin only)"""
    query = db.query(User)

    if search:
        query = query.filter(or_(
            User.email.ilike(f"%{search}%"),
            User.name.ilike(f"%{search}%")
        ))
    if role:
        query = query.filter(User.role == role)
    if is_active is not None:
        query = query.filter(User.is_active == is_active)

    return query.order_by(User.created_at.desc()).offset(skip).limit(limit).all()

@router.post("/", response_model=UserSchema, status_code=status.HTTP_201_CREATED)
def create_user(
    user_create: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Create a user (admin only)"""
    if user_crud.get_by_email(db, user_create.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    return user_crud.create(db, user_create)

@router.put("/{user_id}", response_model=UserSchema)
def update_user(
    user_id: UUID,
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Update role, active flag or password (admin only)"""
    user = user_crud.get(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    if user.id == current_user.id and user_update.is_active is False:
        raise HTTPException(status_code=400, detail="You cannot deactivate yourself")

    return user_crud.update(db, user, user_update)
