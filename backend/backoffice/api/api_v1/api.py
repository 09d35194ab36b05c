from fastapi import APIRouter
from backoffice.api.api_v1.endpoints import (
    auth,
    users,
    invoices,
    expenses,
    inventory,
    products,
    packaging,
    purchase_orders,
    planner,
    ebay,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(packaging.router, prefix="/packaging", tags=["packaging"])
api_router.include_router(purchase_orders.router, prefix="/purchase-orders", tags=["purchase-orders"])
api_router.include_router(planner.router, prefix="/planner", tags=["planner"])
api_router.include_router(ebay.router, prefix="/ebay", tags=["ebay"])
