from sqlalchemy import Column, String, Boolean, Enum, Text, DateTime
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel

class UserRole(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"

class User(BaseModel):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.USER)
    is_active = Column(Boolean, default=True)

    # eBay OAuth tokens
    ebay_access_token = Column(Text)
    ebay_refresh_token = Column(Text)
    ebay_token_expiry = Column(DateTime)
    ebay_refresh_token_expiry = Column(DateTime)
    ebay_connected = Column(Boolean, default=False, nullable=False)

    # relationships
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
    invoices = relationship("Invoice", back_populates="user", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="user", cascade="all, delete-orphan")
    packaging_items = relationship("Packaging", back_populates="user", cascade="all, delete-orphan")
    inventory_items = relationship("InventoryItem", back_populates="user", cascade="all, delete-orphan")
    purchase_orders = relationship("PurchaseOrder", back_populates="user", cascade="all, delete-orphan")
    plans = relationship("Plan", back_populates="user", cascade="all, delete-orphan")
