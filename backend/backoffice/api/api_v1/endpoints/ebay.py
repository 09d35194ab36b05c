import logging
from datetime import date, datetime, timedelta
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from backoffice.api.deps import get_db, get_current_active_user, get_current_admin_user
from backoffice.core.config import settings
from backoffice.crud.crud_user import user_crud
from backoffice.models.user import User
from backoffice.schemas.common import Message
from backoffice.schemas.ebay import (
    EbayAuthUrl,
    EbayStatus,
    EbayOrder,
    EbayOrderList,
    EbayListingIn,
    EbayAppToken,
)
from backoffice.services.ebay import (
    EbayAuthError,
    EbayConfig,
    EbayOAuth,
    create_client_for_user,
    store_user_token,
    clear_user_token,
    sign_state,
    read_state,
)
from backoffice.services.ebay import orders as ebay_orders
from backoffice.services.ebay import listings as ebay_listings
from backoffice.services.ebay import analytics as ebay_analytics

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/auth", response_model=EbayAuthUrl)
def get_auth_url(
    current_user: User = Depends(get_current_active_user)
):
    """eBay consent URL; the state carries the signed user id"""
    url = EbayOAuth().get_authorization_url(state=sign_state(current_user.id))
    return {"auth_url": url}

@router.get("/callback")
def oauth_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """OAuth redirect target: exchange the code and store the tokens"""
    if error:
        logger.warning("eBay OAuth declined: %s %s", error, error_description)
        raise HTTPException(status_code=400, detail=f"eBay OAuth failed: {error_description or error}")
    if not code:
        raise HTTPException(status_code=400, detail="Authorization code not provided")
    if not state:
        raise EbayAuthError("Missing OAuth state")

    user_id = read_state(state)
    try:
        user = user_crud.get(db, UUID(user_id))
    except ValueError:
        raise EbayAuthError("Invalid OAuth state")
    if not user or not user.is_active:
        raise EbayAuthError("Invalid OAuth state")

    token = EbayOAuth().exchange_code_for_token(code)
    store_user_token(db, user, token)
    logger.info("eBay account connected for user %s", user.id)

    return RedirectResponse(
        url=f"{settings.FRONTEND_URL.rstrip('/')}/ebay?ebay_connected=true",
        status_code=302
    )

@router.get("/status", response_model=EbayStatus)
def get_status(
    current_user: User = Depends(get_current_active_user)
):
    """Whether the user has a linked eBay account"""
    expiry = current_user.ebay_token_expiry
    return {
        "connected": bool(current_user.ebay_connected and current_user.ebay_access_token),
        "environment": EbayConfig.from_settings().environment.value,
        "token_expiry": expiry,
        "token_expired": bool(expiry and expiry <= datetime.utcnow()),
    }

@router.post("/disconnect", response_model=Message)
def disconnect(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Forget the stored eBay tokens"""
    clear_user_token(db, current_user)
    return {"message": "eBay account disconnected"}

@router.get("/orders")
def get_orders(
    order_id: Optional[str] = Query(None, alias="orderId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    fulfillment_status: Optional[List[str]] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Seller orders, or one order when orderId is given"""
    with create_client_for_user(db, current_user) as client:
        if order_id:
            return EbayOrder(**ebay_orders.get_order(client, order_id))
        return EbayOrderList(**ebay_orders.get_orders(
            client,
            limit=limit,
            offset=offset,
            fulfillment_status=fulfillment_status,
            start_date=start_date,
            end_date=end_date,
        ))

@router.get("/listings")
def get_listings(
    sku: Optional[str] = None,
    limit: int = Query(20, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Inventory items, or one item when sku is given"""
    with create_client_for_user(db, current_user) as client:
        if sku:
            return ebay_listings.get_listing(client, sku)
        return ebay_listings.get_listings(client, limit=limit, offset=offset)

def _listing_payload(listing: EbayListingIn) -> dict:
    payload = {"product": listing.product, "condition": listing.condition}
    if listing.availability is not None:
        payload["availability"] = listing.availability
    if listing.package_weight_and_size is not None:
        payload["packageWeightAndSize"] = listing.package_weight_and_size
    return payload

@router.post("/listings", status_code=201)
def create_listing(
    listing: EbayListingIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Create an inventory item for a SKU"""
    with create_client_for_user(db, current_user) as client:
        return ebay_listings.upsert_listing(client, listing.sku, _listing_payload(listing))

@router.put("/listings")
def update_listing(
    listing: EbayListingIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Replace the inventory item for a SKU"""
    with create_client_for_user(db, current_user) as client:
        return ebay_listings.upsert_listing(client, listing.sku, _listing_payload(listing))

@router.get("/analytics")
def get_analytics(
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    metrics: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
):
    """Seller standards plus the daily traffic report (last 30 days by default)"""
    end_date = end_date or date.today()
    start_date = start_date or end_date - timedelta(days=30)
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="startDate must be before endDate")

    metric_list = [m.strip() for m in metrics.split(",") if m.strip()] if metrics else None
    with create_client_for_user(db, current_user) as client:
        seller_standards = ebay_analytics.get_seller_standards(client)
        traffic_report = ebay_analytics.get_traffic_report(
            client, start_date, end_date, metrics=metric_list
        )
    return {
        "seller_standards": seller_standards,
        "traffic_report": traffic_report,
        "start_date": start_date,
        "end_date": end_date,
    }

@router.get("/app-token", response_model=EbayAppToken)
def get_app_token(
    current_user: User = Depends(get_current_admin_user)
):
    """Check the client-credentials flow; the token itself is not returned"""
    token = EbayOAuth().get_application_token()
    return {"token_type": token.token_type, "expires_at": token.expires_at}
