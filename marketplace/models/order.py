from marketplace.models.base import BaseModel
from marketplace.extensions import db
from marketplace.enums import OrderStatus, enum_values


class Order(BaseModel):
    __tablename__ = "orders"

    order_number = db.Column(db.String(50), unique=True, nullable=False, index=True)
    user_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    total_amount = db.Column(db.Numeric(15, 2), nullable=False)
    status = db.Column(
        db.Enum(OrderStatus, name="order_statuses", values_callable=enum_values),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    delivery_address = db.Column(db.Text, nullable=False)

    # Relationships
    items = db.relationship(
        "OrderItem", backref="order", lazy="dynamic", cascade="all, delete-orphan"
    )
    return_order = db.relationship(
        "ReturnOrder", backref="order", uselist=False, cascade="all, delete-orphan"
    )
    wallet_transactions = db.relationship("WalletTransaction", backref="order")

    def items_total(self):
        """Sum of the line subtotals; never written back to total_amount"""
        return sum((item.subtotal for item in self.items), start=0)

    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def to_dict(self, include_items=False):
        data = super().to_dict()
        if include_items:
            data["items"] = [item.to_dict() for item in self.items]
        return data


class OrderItem(BaseModel):
    __tablename__ = "order_items"

    order_id = db.Column(
        db.String(36),
        db.ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = db.Column(
        db.String(36),
        db.ForeignKey("products.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    seller_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    product_name = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Numeric(15, 2), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    subtotal = db.Column(db.Numeric(15, 2), nullable=False)

    def to_dict(self):
        data = super().to_dict()
        data["product_images"] = list(self.product.images or []) if self.product else []
        return data
