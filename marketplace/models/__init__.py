from .user import User
from .verification_code import VerificationCode
from .product import Product
from .cart import CartItem
from .order import Order, OrderItem
from .return_order import ReturnOrder
from .wallet import WalletTransaction

__all__ = [
    "User",
    "VerificationCode",
    "Product",
    "CartItem",
    "Order",
    "OrderItem",
    "ReturnOrder",
    "WalletTransaction",
]
