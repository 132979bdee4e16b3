import logging

from marketplace.models.order import Order, OrderItem
from marketplace.models.return_order import ReturnOrder
from marketplace.models.user import User
from marketplace.services.wallet_service import WalletService
from marketplace.extensions import db
from marketplace.enums import OrderStatus, ReturnStatus
from marketplace.utils.exceptions import NotFoundError
from marketplace.utils.helpers import utcnow_naive

logger = logging.getLogger(__name__)


class ReturnService:
    """Return/refund lifecycle.

    requested -> delivered -> resolved | in_conflict

    The parent order carries a mirror of the return status
    (return_requested, return_delivered, ...). Both rows are always written
    in the same transaction.
    """

    @staticmethod
    def _get_buyer_return(order_id: str, user_id: str) -> ReturnOrder:
        return_order = (
            ReturnOrder.query.filter_by(order_id=order_id, user_id=user_id)
            .with_for_update()
            .first()
        )
        if not return_order:
            raise NotFoundError("Return not found")
        return return_order

    @staticmethod
    def _get_seller_return(order_id: str, seller_id: str) -> ReturnOrder:
        return_order = (
            ReturnOrder.query.filter_by(order_id=order_id, seller_id=seller_id)
            .with_for_update()
            .first()
        )
        if not return_order:
            raise NotFoundError("Return not found")
        return return_order

    @staticmethod
    def _transition(return_order: ReturnOrder, expected: ReturnStatus,
                    new_status: ReturnStatus, order_status: OrderStatus):
        if return_order.status != expected:
            raise ValueError(
                f"Return is {return_order.status.value}, expected {expected.value}"
            )
        return_order.status = new_status
        return_order.order.status = order_status

    @staticmethod
    def request_return(order_id: str, user_id: str, reason: str) -> ReturnOrder:
        """Open a return on a delivered order, freezing the refund amount"""
        try:
            order = (
                Order.query.filter_by(id=order_id, user_id=user_id)
                .with_for_update()
                .first()
            )
            if not order:
                raise NotFoundError("Order not found")

            if order.return_order is not None:
                raise ValueError("A return has already been requested for this order")

            if order.status != OrderStatus.DELIVERED:
                raise ValueError("Only delivered orders can be returned")

            first_item = order.items.order_by(OrderItem.created_at.asc()).first()
            seller = db.session.get(User, first_item.seller_id) if first_item else None
            if seller is None:
                raise NotFoundError("Seller not found")

            return_order = ReturnOrder(
                order_id=order.id,
                user_id=user_id,
                seller_id=seller.id,
                return_reason=reason,
                status=ReturnStatus.REQUESTED,
                refund_amount=order.total_amount,
                return_address=seller.return_address,
            )
            db.session.add(return_order)
            order.status = OrderStatus.RETURN_REQUESTED

            db.session.commit()
            logger.info("Return requested for order %s by user %s", order.order_number, user_id)
            return return_order

        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def mark_return_delivered(order_id: str, user_id: str) -> ReturnOrder:
        """Buyer reports that the parcel reached the seller's return address"""
        try:
            return_order = ReturnService._get_buyer_return(order_id, user_id)
            ReturnService._transition(
                return_order,
                ReturnStatus.REQUESTED,
                ReturnStatus.DELIVERED,
                OrderStatus.RETURN_DELIVERED,
            )
            return_order.delivered_at = utcnow_naive()

            db.session.commit()
            logger.info("Return for order %s marked delivered", order_id)
            return return_order

        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def confirm_return(order_id: str, seller_id: str) -> ReturnOrder:
        """Seller accepts the returned goods; the buyer is refunded once"""
        try:
            return_order = ReturnService._get_seller_return(order_id, seller_id)
            ReturnService._transition(
                return_order,
                ReturnStatus.DELIVERED,
                ReturnStatus.RESOLVED,
                OrderStatus.RETURN_RESOLVED,
            )
            return_order.resolved_at = utcnow_naive()

            WalletService.credit(
                return_order.user_id,
                return_order.refund_amount,
                return_order.order_id,
                f"Refund for returned order {return_order.order.order_number}",
                commit=False,
            )

            db.session.commit()
            logger.info("Return for order %s resolved by seller %s", order_id, seller_id)
            return return_order

        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def dispute_return(order_id: str, seller_id: str) -> ReturnOrder:
        """Seller contests the return; left for manual handling"""
        try:
            return_order = ReturnService._get_seller_return(order_id, seller_id)
            ReturnService._transition(
                return_order,
                ReturnStatus.DELIVERED,
                ReturnStatus.IN_CONFLICT,
                OrderStatus.RETURN_IN_CONFLICT,
            )
            return_order.resolved_at = utcnow_naive()

            db.session.commit()
            logger.warning("Return for order %s disputed by seller %s", order_id, seller_id)
            return return_order

        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def get_user_returns(user_id: str):
        return (
            ReturnOrder.query.filter_by(user_id=user_id)
            .order_by(ReturnOrder.created_at.desc())
            .all()
        )

    @staticmethod
    def get_seller_returns(seller_id: str, status: ReturnStatus = None):
        query = ReturnOrder.query.filter_by(seller_id=seller_id)
        if status:
            query = query.filter(ReturnOrder.status == status)
        return query.order_by(ReturnOrder.created_at.desc()).all()
