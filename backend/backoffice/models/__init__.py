# import every SQLAlchemy model here so metadata is complete
from .user import User, UserRole
from .invoice import Invoice
from .expense import Expense
from .inventory import InventoryItem, InventoryReplenishment
from .packaging import Packaging, PackagingReplenishment
from .product import Product, ProductReplenishment, FulfillmentType
from .purchase_order import PurchaseOrder, PurchaseOrderItem, PurchaseOrderStatus
from .plan import Plan, EbayPlanDetails, AmazonPlanDetails, Marketplace
