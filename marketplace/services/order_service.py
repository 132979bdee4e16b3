import logging
from decimal import Decimal

from marketplace.models.order import Order, OrderItem
from marketplace.models.user import User
from marketplace.services.wallet_service import WalletService
from marketplace.services.return_service import ReturnService
from marketplace.extensions import db
from marketplace.enums import OrderStatus, SellerAction
from marketplace.utils.exceptions import NotFoundError
from marketplace.utils.order_utils import (
    _get_cart_lines,
    _get_products_for_update,
    _validate_lines,
    _create_order,
    _create_order_items,
    _clear_cart,
    _restore_stock,
)

logger = logging.getLogger(__name__)

# Seller-driven transitions on the order itself; returns are handled by ReturnService
SELLER_TRANSITIONS = {
    SellerAction.ACCEPT: (OrderStatus.PENDING, OrderStatus.CONFIRMED),
    SellerAction.REJECT: (OrderStatus.PENDING, OrderStatus.CANCELLED),
    SellerAction.DELIVER: (OrderStatus.CONFIRMED, OrderStatus.DELIVERED),
}


class OrderService:

    @staticmethod
    def create_order_from_cart(user_id: str, delivery_address: str) -> Order:
        """Turn the user's cart into an order in a single transaction"""
        if not delivery_address or not delivery_address.strip():
            raise ValueError("Delivery address is required")

        try:
            cart_lines = _get_cart_lines(user_id)
            if not cart_lines:
                raise ValueError("Cart is empty")

            products_map = _get_products_for_update({line.product_id for line in cart_lines})
            validated_lines, total_amount = _validate_lines(cart_lines, products_map)

            order = _create_order(user_id, total_amount, delivery_address.strip())
            order_items = _create_order_items(order, validated_lines)
            _clear_cart(user_id)

            db.session.commit()
            logger.info(
                "Order %s placed by user %s: %d items, total %s",
                order.order_number, user_id, len(order_items), order.total_amount,
            )
            return order

        except ValueError:
            db.session.rollback()
            raise
        except Exception:
            db.session.rollback()
            logger.error("Failed to create order for user %s", user_id, exc_info=True)
            raise

    @staticmethod
    def get_user_orders(user_id: str):
        return (
            Order.query.filter_by(user_id=user_id)
            .order_by(Order.created_at.desc())
            .all()
        )

    @staticmethod
    def get_order(order_id: str, user_id: str) -> Order:
        order = Order.query.filter_by(id=order_id, user_id=user_id).first()
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def get_order_history(user_id: str) -> dict:
        orders = OrderService.get_user_orders(user_id)

        enhanced = []
        for order in orders:
            data = order.to_dict(include_items=True)
            data["return_status"] = (
                order.return_order.status.value if order.return_order else None
            )
            data["item_count"] = order.item_count()
            enhanced.append(data)

        return {
            "orders": enhanced,
            "total_orders": len(enhanced),
            "total_amount": float(sum((o.total_amount for o in orders), Decimal("0.00"))),
        }

    @staticmethod
    def _get_seller_order(order_id: str, seller_id: str, lock: bool = False) -> Order:
        """Order containing at least one of the seller's items"""
        query = Order.query.filter(
            Order.id == order_id,
            Order.items.any(OrderItem.seller_id == seller_id),
        )
        if lock:
            query = query.with_for_update()
        order = query.first()
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def get_seller_orders(seller_id: str, status: OrderStatus = None) -> list:
        """Orders grouped with only this seller's lines"""
        query = Order.query.filter(Order.items.any(OrderItem.seller_id == seller_id))
        if status:
            query = query.filter(Order.status == status)
        orders = query.order_by(Order.created_at.desc()).all()

        grouped = []
        for order in orders:
            items = order.items.filter_by(seller_id=seller_id).all()
            buyer = db.session.get(User, order.user_id)
            grouped.append(
                {
                    "order_id": order.id,
                    "order_number": order.order_number,
                    "order_status": order.status.value,
                    "total_amount": float(order.total_amount),
                    "seller_amount": float(sum((i.subtotal for i in items), Decimal("0.00"))),
                    "delivery_address": order.delivery_address,
                    "order_created_at": order.created_at.isoformat(),
                    "order_updated_at": order.updated_at.isoformat(),
                    "buyer_id": order.user_id,
                    "buyer_first_name": buyer.first_name if buyer else None,
                    "buyer_last_name": buyer.last_name if buyer else None,
                    "return_order": order.return_order.to_dict() if order.return_order else None,
                    "items": [item.to_dict() for item in items],
                }
            )
        return grouped

    @staticmethod
    def apply_seller_action(order_id: str, seller_id: str, action: str) -> Order:
        """Dispatch accept / reject / deliver / confirm_return / dispute_return"""
        try:
            action = SellerAction(action)
        except ValueError:
            raise ValueError("Invalid action")

        if action == SellerAction.CONFIRM_RETURN:
            return ReturnService.confirm_return(order_id, seller_id).order
        if action == SellerAction.DISPUTE_RETURN:
            return ReturnService.dispute_return(order_id, seller_id).order
        if action == SellerAction.REJECT:
            return OrderService.reject_order(order_id, seller_id)
        return OrderService.update_order_status(order_id, seller_id, action)

    @staticmethod
    def update_order_status(order_id: str, seller_id: str, action: SellerAction) -> Order:
        """Accept or deliver an order (seller only)"""
        current_status, new_status = SELLER_TRANSITIONS[action]
        try:
            order = OrderService._get_seller_order(order_id, seller_id, lock=True)

            if order.status != current_status:
                raise ValueError(
                    f"Cannot {action.value} an order that is {order.status.value}"
                )

            order.status = new_status
            db.session.commit()
            logger.info("Order %s %s -> %s by seller %s",
                        order.order_number, current_status.value, new_status.value, seller_id)
            return order

        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def reject_order(order_id: str, seller_id: str) -> Order:
        """Cancel a pending order, restore stock and refund the buyer's wallet"""
        try:
            order = OrderService._get_seller_order(order_id, seller_id, lock=True)

            if order.status != OrderStatus.PENDING:
                raise ValueError(f"Cannot reject an order that is {order.status.value}")

            order.status = OrderStatus.CANCELLED
            _restore_stock(order)

            WalletService.credit(
                order.user_id,
                order.total_amount,
                order.id,
                f"Refund for cancelled order {order.order_number}",
                commit=False,  # single commit below
            )

            db.session.commit()
            logger.info("Order %s rejected by seller %s", order.order_number, seller_id)
            return order

        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def get_all_orders():
        return Order.query.order_by(Order.created_at.desc()).all()
