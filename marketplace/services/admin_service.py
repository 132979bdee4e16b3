from decimal import Decimal

from flask import current_app
from sqlalchemy import func

from marketplace.models.order import Order, OrderItem
from marketplace.models.product import Product
from marketplace.models.user import User
from marketplace.extensions import db
from marketplace.enums import OrderStatus
from marketplace.services.order_service import OrderService


class AdminService:

    @staticmethod
    def get_seller_earnings():
        """Sales per seller over delivered orders, split into commission and payout"""
        rate = Decimal(str(current_app.config.get("ADMIN_COMMISSION_RATE", "0.20")))

        rows = (
            db.session.query(
                OrderItem.seller_id,
                func.sum(OrderItem.price * OrderItem.quantity).label("total_sales"),
            )
            .join(Order, OrderItem.order_id == Order.id)
            .filter(Order.status == OrderStatus.DELIVERED)
            .group_by(OrderItem.seller_id)
            .all()
        )

        earnings = []
        for seller_id, total_sales in rows:
            seller = db.session.get(User, seller_id)
            total_sales = Decimal(str(total_sales or 0)).quantize(Decimal("0.01"))
            commission = (total_sales * rate).quantize(Decimal("0.01"))
            earnings.append(
                {
                    "seller_id": seller_id,
                    "seller_name": seller.full_name if seller else None,
                    "total_sales": float(total_sales),
                    "admin_commission": float(commission),
                    "seller_earnings": float(total_sales - commission),
                }
            )

        earnings.sort(key=lambda e: e["total_sales"], reverse=True)
        return earnings

    @staticmethod
    def get_dashboard_data() -> dict:
        users = User.query.filter_by(deleted_at=None).order_by(User.created_at.desc()).all()
        products = (
            Product.query.filter_by(deleted_at=None)
            .order_by(Product.created_at.desc())
            .all()
        )
        orders = OrderService.get_all_orders()

        order_rows = []
        for order in orders:
            data = order.to_dict()
            data["buyer_name"] = order.buyer.full_name if order.buyer else None
            order_rows.append(data)

        return {
            "users": [
                {
                    "id": u.id,
                    "email": u.email,
                    "first_name": u.first_name,
                    "last_name": u.last_name,
                    "user_type": u.role.value,
                    "shop_name": u.shop_name,
                }
                for u in users
            ],
            "products": [p.to_dict(include_seller=True) for p in products],
            "orders": order_rows,
            "seller_earnings": AdminService.get_seller_earnings(),
        }
