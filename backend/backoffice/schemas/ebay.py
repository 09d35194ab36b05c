from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel
from backoffice.schemas.common import CamelRequest

class EbayAuthUrl(BaseModel):
    auth_url: str

class EbayStatus(BaseModel):
    connected: bool
    environment: str
    token_expiry: Optional[datetime] = None
    token_expired: bool = False

class EbayAddress(BaseModel):
    name: str = ""
    address_line1: str = ""
    address_line2: Optional[str] = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    phone: Optional[str] = None

class EbayLineItem(BaseModel):
    item_id: str = ""
    title: str = ""
    quantity: int = 1
    price: float = 0
    sku: Optional[str] = None
    image_url: Optional[str] = None

class EbayOrder(BaseModel):
    order_id: str
    buyer_id: str = ""
    buyer_email: str = ""
    total_amount: float = 0
    currency: str = "USD"
    status: str = "PENDING"
    line_items: List[EbayLineItem] = []
    shipping_address: EbayAddress
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

class EbayOrderList(BaseModel):
    orders: List[EbayOrder]
    total: int
    limit: int
    offset: int

class EbayListingIn(CamelRequest):
    sku: str
    product: Dict[str, Any]
    condition: str = "NEW"
    availability: Optional[Dict[str, Any]] = None
    package_weight_and_size: Optional[Dict[str, Any]] = None

class EbayAppToken(BaseModel):
    token_type: str
    expires_at: datetime
