from marketplace.models.base import BaseModel
from marketplace.extensions import db


class CartItem(BaseModel):
    __tablename__ = "cart"
    __table_args__ = (
        db.UniqueConstraint("user_id", "product_id", name="uq_cart_user_product"),
    )

    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_id = db.Column(
        db.String(36),
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    quantity = db.Column(db.Integer, nullable=False, default=1)

    product = db.relationship("Product")

    @property
    def subtotal(self):
        return self.product.price * self.quantity

    def to_dict(self):
        data = super().to_dict()
        product = self.product
        data["product_name"] = product.name
        data["product_price"] = float(product.price)
        data["product_images"] = list(product.images or [])
        data["seller_id"] = product.seller_id
        data["shop_name"] = product.seller.shop_name if product.seller else None
        data["subtotal"] = float(self.subtotal)
        return data
