from marketplace.models.base import BaseModel
from marketplace.extensions import db
from marketplace.enums import TransactionType, enum_values


class WalletTransaction(BaseModel):
    """Ledger entry behind User.wallet_balance"""

    __tablename__ = "wallet_transactions"

    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    order_id = db.Column(
        db.String(36),
        db.ForeignKey("orders.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    type = db.Column(
        db.Enum(TransactionType, name="transaction_types", values_callable=enum_values),
        nullable=False,
    )
    amount = db.Column(db.Numeric(15, 2), nullable=False)
    balance_before = db.Column(db.Numeric(15, 2), nullable=False)
    balance_after = db.Column(db.Numeric(15, 2), nullable=False)
    description = db.Column(db.Text)
