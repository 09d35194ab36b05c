from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from backoffice.core.security import get_password_hash, verify_password
from backoffice.models.user import User, UserRole
from backoffice.schemas.user import UserCreate, UserUpdate


class CRUDUser:
    def get(self, db: Session, user_id: UUID) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    def get_multi(self, db: Session, skip: int = 0, limit: int = 100) -> List[User]:
        return db.query(User).order_by(User.created_at.desc()).offset(skip).limit(limit).all()

    def create(self, db: Session, obj_in: UserCreate) -> User:
        user = User(
            email=obj_in.email.lower(),
            name=obj_in.name,
            hashed_password=get_password_hash(obj_in.password),
            role=obj_in.role or UserRole.USER,
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    def update(self, db: Session, user: User, obj_in: UserUpdate) -> User:
        update_data = obj_in.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        if password:
            user.hashed_password = get_password_hash(password)
        for field, value in update_data.items():
            setattr(user, field, value)
        db.commit()
        db.refresh(user)
        return user

    def authenticate(self, db: Session, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def is_active(self, user: User) -> bool:
        return bool(user.is_active)

    def is_admin(self, user: User) -> bool:
        return user.role == UserRole.ADMIN


user_crud = CRUDUser()
