import logging
from sqlalchemy.orm import Session
from backoffice.core.config import settings
from backoffice.core.security import get_password_hash
from backoffice.db.database import Base, SessionLocal, engine
from backoffice.models.user import User, UserRole

logger = logging.getLogger(__name__)

def seed_admin(db: Session) -> None:
    """Create the first admin from FIRST_ADMIN_* when no such user exists"""
    if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
        return

    email = settings.FIRST_ADMIN_EMAIL.lower()
    if db.query(User).filter(User.email == email).first():
        return

    db.add(User(
        email=email,
        name=settings.FIRST_ADMIN_NAME,
        hashed_password=get_password_hash(settings.FIRST_ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        is_active=True,
    ))
    db.commit()
    logger.info("Seeded admin user %s", email)

def init_db() -> None:
    """Create tables (existing ones are left alone) and seed the admin"""
    # registers every model on Base.metadata
    import backoffice.models  # noqa: F401
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_admin(db)
    finally:
        db.close()
