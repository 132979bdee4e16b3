import logging
from decimal import Decimal

from marketplace.models.cart import CartItem
from marketplace.extensions import db
from marketplace.services.product_service import ProductService
from marketplace.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class CartService:

    @staticmethod
    def get_cart_items(user_id: str):
        return (
            CartItem.query.filter_by(user_id=user_id)
            .order_by(CartItem.created_at.desc())
            .all()
        )

    @staticmethod
    def summary(user_id: str) -> dict:
        items = CartService.get_cart_items(user_id)
        total = sum((item.subtotal for item in items), Decimal("0.00"))
        return {
            "items": [item.to_dict() for item in items],
            "item_count": len(items),
            "total": float(total),
        }

    @staticmethod
    def add_to_cart(user_id: str, product_id: str, quantity: int) -> CartItem:
        """Insert a cart line or merge the quantity into the existing one"""
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        product = ProductService.get_public_product(product_id)

        cart_item = (
            CartItem.query.filter_by(user_id=user_id, product_id=product.id)
            .with_for_update()
            .first()
        )
        if cart_item:
            cart_item.quantity += quantity
        else:
            cart_item = CartItem(user_id=user_id, product_id=product.id, quantity=quantity)
            db.session.add(cart_item)

        db.session.commit()
        return cart_item

    @staticmethod
    def _get_own_item(cart_item_id: str, user_id: str) -> CartItem:
        cart_item = CartItem.query.filter_by(id=cart_item_id, user_id=user_id).first()
        if not cart_item:
            raise NotFoundError("Cart item not found")
        return cart_item

    @staticmethod
    def update_quantity(cart_item_id: str, user_id: str, quantity: int) -> CartItem:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")
        cart_item = CartService._get_own_item(cart_item_id, user_id)
        cart_item.quantity = quantity
        db.session.commit()
        return cart_item

    @staticmethod
    def remove_from_cart(cart_item_id: str, user_id: str):
        cart_item = CartService._get_own_item(cart_item_id, user_id)
        db.session.delete(cart_item)
        db.session.commit()

    @staticmethod
    def clear_cart(user_id: str, commit: bool = True) -> int:
        deleted = CartItem.query.filter_by(user_id=user_id).delete()
        if commit:
            db.session.commit()
        return deleted
