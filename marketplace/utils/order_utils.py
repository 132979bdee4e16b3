from decimal import Decimal
from marketplace.extensions import db
from marketplace.models.cart import CartItem
from marketplace.models.product import Product
from marketplace.enums import OrderStatus
from marketplace.models.order import Order, OrderItem
from marketplace.utils.helpers import generate_order_number
from marketplace.services.cart_service import CartService


def _get_cart_lines(user_id):
    return (
        CartItem.query.filter_by(user_id=user_id)
        .order_by(CartItem.created_at.asc())
        .all()
    )


def _get_products_for_update(product_ids):
    # Lock in a stable order so concurrent checkouts cannot deadlock
    products = (
        db.session.query(Product)
        .filter(Product.id.in_(sorted(product_ids)))
        .order_by(Product.id.asc())
        .with_for_update()
        .all()
    )

    return {p.id: p for p in products}


def _validate_lines(cart_lines, products_map):
    total_amount = Decimal("0.00")
    validated_lines = []

    for line in cart_lines:
        product = products_map.get(line.product_id)
        qty = line.quantity

        if not product or product.is_deleted:
            raise ValueError("Product not found")

        if qty <= 0:
            raise ValueError(f"Invalid quantity for {product.name}")

        if not product.is_available:
            raise ValueError(f"Product {product.name} is not available")

        if not product.has_stock(qty):
            raise ValueError(f"Insufficient stock for {product.name}")

        subtotal = product.price * qty
        total_amount += subtotal

        validated_lines.append((product, qty, subtotal))

    return validated_lines, total_amount


def _unique_order_number():
    order_number = generate_order_number()
    while db.session.query(Order.id).filter_by(order_number=order_number).first():
        order_number = generate_order_number()
    return order_number


def _create_order(user_id, total_amount, delivery_address):
    order = Order(
        order_number=_unique_order_number(),
        user_id=user_id,
        total_amount=total_amount,
        delivery_address=delivery_address,
        status=OrderStatus.PENDING,
    )

    db.session.add(order)
    db.session.flush()

    return order


def _create_order_items(order, validated_lines):
    created_items = []
    for product, qty, subtotal in validated_lines:
        product.deduct_stock(qty)

        order_item = OrderItem(
            order_id=order.id,
            product_id=product.id,
            seller_id=product.seller_id,
            product_name=product.name,
            price=product.price,
            quantity=qty,
            subtotal=subtotal,
        )
        db.session.add(order_item)
        created_items.append(order_item)

    return created_items


def _clear_cart(user_id):
    return CartService.clear_cart(user_id, commit=False)


def _restore_stock(order):
    product_ids = {item.product_id for item in order.items}
    products_map = _get_products_for_update(product_ids)
    for item in order.items:
        product = products_map.get(item.product_id)
        if product is not None:
            product.add_stock(item.quantity)
