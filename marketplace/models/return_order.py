from marketplace.models.base import BaseModel
from marketplace.extensions import db
from marketplace.enums import ReturnStatus, enum_values


class ReturnOrder(BaseModel):
    """Post-delivery return negotiation for a single order"""

    __tablename__ = "return_orders"

    order_id = db.Column(
        db.String(36),
        db.ForeignKey("orders.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    user_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    seller_id = db.Column(
        db.String(36), db.ForeignKey("users.id"), nullable=False, index=True
    )
    return_reason = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.Enum(ReturnStatus, name="return_statuses", values_callable=enum_values),
        default=ReturnStatus.REQUESTED,
        nullable=False,
    )
    # Frozen at creation from the order total
    refund_amount = db.Column(db.Numeric(15, 2), nullable=False)
    return_address = db.Column(db.Text)
    delivered_at = db.Column(db.DateTime, nullable=True)
    resolved_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self, include_order=False):
        data = super().to_dict()
        if include_order and self.order is not None:
            data["order_number"] = self.order.order_number
            data["order_status"] = self.order.status.value
        return data
