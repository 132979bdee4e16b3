from marketplace.models.base import BaseModel, SoftDeleteMixin
from marketplace.extensions import db
from marketplace.enums import ProductStatus, enum_values


class Product(BaseModel, SoftDeleteMixin):
    __tablename__ = "products"

    seller_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    product_code = db.Column(db.String(50), unique=True, nullable=False)
    name = db.Column(db.String(255), nullable=False, index=True)
    slug = db.Column(db.String(255), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100), nullable=False, index=True)
    price = db.Column(db.Numeric(15, 2), nullable=False)
    stock_quantity = db.Column(db.Integer, default=0, nullable=False)
    images = db.Column(db.JSON, default=list, nullable=False)
    status = db.Column(
        db.Enum(ProductStatus, name="product_statuses", values_callable=enum_values),
        default=ProductStatus.ACTIVE,
        nullable=False,
    )

    # Relationships
    order_items = db.relationship("OrderItem", backref="product")

    @property
    def is_available(self) -> bool:
        return (
            self.status == ProductStatus.ACTIVE
            and self.stock_quantity > 0
            and not self.is_deleted
        )

    def has_stock(self, quantity: int) -> bool:
        return self.stock_quantity >= quantity

    def deduct_stock(self, quantity: int):
        if not self.has_stock(quantity):
            raise ValueError(f"Insufficient stock for product {self.name}")
        self.stock_quantity -= quantity
        return self.sync_stock_status()

    def add_stock(self, quantity: int):
        self.stock_quantity += quantity
        return self.sync_stock_status()

    def sync_stock_status(self):
        """Flip between active and out_of_stock as stock crosses zero"""
        if self.stock_quantity == 0 and self.status == ProductStatus.ACTIVE:
            self.status = ProductStatus.OUT_OF_STOCK
        elif self.stock_quantity > 0 and self.status == ProductStatus.OUT_OF_STOCK:
            self.status = ProductStatus.ACTIVE
        return self

    def to_dict(self, include_seller=False):
        data = super().to_dict()
        data.pop("deleted_at", None)
        data["images"] = list(self.images or [])
        if include_seller and self.seller is not None:
            data["shop_name"] = self.seller.shop_name
            data["seller_name"] = self.seller.full_name
        return data
