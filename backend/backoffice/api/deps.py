from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.core.security import decode_access_token
from backoffice.db.database import get_db
from backoffice.models.user import User
from backoffice.crud.crud_user import user_crud

# bearer header is optional: the auth cookie is accepted too
security = HTTPBearer(auto_error=False)

def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Token from the Authorization header, falling back to the auth cookie"""
    if credentials and credentials.credentials:
        return credentials.credentials
    token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token

def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(get_token),
) -> User:
    """Currently authenticated user"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
        subject: Optional[str] = payload.get("sub")
        # purpose-bound tokens (e.g. OAuth state) are not session tokens
        if subject is None or payload.get("purpose"):
            raise credentials_exception
        user_id = UUID(subject)
    except (JWTError, ValueError):
        raise credentials_exception

    user = user_crud.get(db, user_id)
    if user is None:
        raise credentials_exception
    return user

def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Currently authenticated, active user"""
    if not user_crud.is_active(current_user):
        raise HTTPException(status_code=403, detail="Inactive user")
    return current_user

def get_current_admin_user(
    current_user: User = Depends(get_current_active_user),
) -> User:
    """Currently authenticated admin"""
    if not user_crud.is_admin(current_user):
        raise HTTPException(
            status_code=403, detail="Not enough permissions"
        )
    return current_user
