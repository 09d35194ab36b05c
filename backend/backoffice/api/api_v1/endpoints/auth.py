import logging
from datetime import timedelta
from typing import Any
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from backoffice.core.config import settings
from backoffice.api.deps import get_db, get_current_active_user
from backoffice.core.security import create_access_token
from backoffice.crud.crud_user import user_crud
from backoffice.models.user import User
from backoffice.schemas.user import Token, UserLogin, User as UserSchema

logger = logging.getLogger(__name__)

router = APIRouter()

def _issue_token(user: User, response: Response) -> dict:
    expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    token = create_access_token(
        user.id,
        expires_delta=expires,
        extra_claims={"email": user.email, "name": user.name, "role": user.role.value},
    )
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=int(expires.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )
    return {
        "access_token": token,
        "token_type": "bearer",
        "expires_in": int(expires.total_seconds()),
    }

async def _read_credentials(request: Request) -> UserLogin:
    # login form posts either JSON or urlencoded form data
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            data = await request.json()
        else:
            form = await request.form()
            data = {
                "email": form.get("email") or form.get("username"),
                "password": form.get("password"),
            }
        return UserLogin(**data)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required"
        )

@router.post("/login", response_model=Token)
async def login_access_token(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
) -> Any:
    """Log in and issue a JWT (also set as the auth cookie)"""
    credentials = await _read_credentials(request)
    user = user_crud.authenticate(
        db, email=credentials.email, password=credentials.password
    )
    if not user:
        logger.info("Failed login for %s", credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )
    elif not user_crud.is_active(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return _issue_token(user, response)

@router.post("/logout")
def logout(response: Response) -> Any:
    """Clear the auth cookie"""
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return {"message": "Logged out successfully"}

@router.get("/me", response_model=UserSchema)
def read_users_me(
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """Current user"""
    return current_user

@router.post("/refresh", response_model=Token)
def refresh_access_token(
    response: Response,
    current_user: User = Depends(get_current_active_user),
) -> Any:
    """Refresh the JWT"""
    return _issue_token(current_user, response)
