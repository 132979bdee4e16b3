from flask import current_app, has_app_context
from decimal import Decimal
from marketplace.models.base import BaseModel, SoftDeleteMixin
from marketplace.extensions import db
from marketplace.enums import UserRole, enum_values
import bcrypt


class User(BaseModel, SoftDeleteMixin):
    __tablename__ = "users"

    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    phone_number = db.Column(db.String(20))
    address = db.Column(db.Text)
    role = db.Column(
        db.Enum(UserRole, name="user_roles", values_callable=enum_values),
        nullable=False,
    )
    is_verified = db.Column(db.Boolean, default=False, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    # Seller-only business profile
    shop_name = db.Column(db.String(255))
    registration_number = db.Column(db.String(100))
    shop_address = db.Column(db.Text)
    warehouse_address = db.Column(db.Text)
    return_address = db.Column(db.Text)
    business_details = db.Column(db.Text)

    wallet_balance = db.Column(db.Numeric(15, 2), default=Decimal("0.00"), nullable=False)

    # Relationships
    products = db.relationship(
        "Product",
        backref="seller",
        lazy="dynamic",
        foreign_keys="Product.seller_id",
    )
    orders = db.relationship(
        "Order", backref="buyer", lazy="dynamic", foreign_keys="Order.user_id"
    )
    cart_items = db.relationship(
        "CartItem", backref="user", lazy="dynamic", cascade="all, delete-orphan"
    )
    wallet_transactions = db.relationship(
        "WalletTransaction", backref="user", lazy="dynamic", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def set_password(self, password: str):
        rounds = 12
        if has_app_context():
            rounds = current_app.config.get("BCRYPT_LOG_ROUNDS", rounds)
        self.password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(rounds)
        ).decode("utf-8")

    def check_password(self, password: str) -> bool:
        return bcrypt.checkpw(
            password.encode("utf-8"), self.password_hash.encode("utf-8")
        )

    def has_role(self, role) -> bool:
        return self.role == role

    def credit_wallet(self, amount: Decimal):
        if amount <= 0:
            raise ValueError("Credit amount must be positive")
        self.wallet_balance = (self.wallet_balance or Decimal("0.00")) + amount
        return self

    def to_dict(self, include_sensitive=False):
        data = super().to_dict()
        if not include_sensitive:
            data.pop("password_hash", None)
            data.pop("deleted_at", None)
        if not self.has_role(UserRole.SELLER):
            for field in (
                "shop_name",
                "registration_number",
                "shop_address",
                "warehouse_address",
                "return_address",
                "business_details",
            ):
                data.pop(field, None)
        return data
