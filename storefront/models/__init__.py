# storefront/models/__init__.py
from .user import User
from .product import Product
from .order import Order, ORDER_STATUSES
from .order_item import OrderItem
from .admin import Admin

__all__ = [
    "User",
    "Product",
    "Order",
    "ORDER_STATUSES",
    "OrderItem",
    "Admin",
]
