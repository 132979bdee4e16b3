from enum import Enum


class UserRole(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"


class ProductStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    OUT_OF_STOCK = "out_of_stock"


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURN_REQUESTED = "return_requested"
    RETURN_DELIVERED = "return_delivered"
    RETURN_RESOLVED = "return_resolved"
    RETURN_IN_CONFLICT = "return_in_conflict"


class ReturnStatus(str, Enum):
    REQUESTED = "requested"
    DELIVERED = "delivered"
    RESOLVED = "resolved"
    IN_CONFLICT = "in_conflict"


class TransactionType(str, Enum):
    REFUND = "refund"


class SellerAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    DELIVER = "deliver"
    CONFIRM_RETURN = "confirm_return"
    DISPUTE_RETURN = "dispute_return"


def enum_values(enum_cls):
    """Store enum values (not member names) in the database"""
    return [member.value for member in enum_cls]
