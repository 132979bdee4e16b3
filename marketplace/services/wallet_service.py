import logging
from decimal import Decimal

from marketplace.models.user import User
from marketplace.models.wallet import WalletTransaction
from marketplace.extensions import db
from marketplace.enums import TransactionType
from marketplace.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class WalletService:

    @staticmethod
    def get_balance(user_id: str) -> Decimal:
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user.wallet_balance

    @staticmethod
    def get_wallet(user_id: str, recent: int = 10) -> dict:
        """Balance with the latest ledger entries"""
        balance = WalletService.get_balance(user_id)
        transactions = (
            WalletTransaction.query.filter_by(user_id=user_id)
            .order_by(WalletTransaction.created_at.desc())
            .limit(recent)
            .all()
        )
        return {
            "wallet_balance": float(balance),
            "recent_transactions": [t.to_dict() for t in transactions],
        }

    @staticmethod
    def credit(user_id: str, amount: Decimal, order_id: str = None,
               description: str = None, commit: bool = True) -> WalletTransaction:
        """Add a refund to the buyer's wallet. At most one refund per order."""
        if order_id:
            existed = (
                db.session.query(WalletTransaction.id)
                .filter(
                    WalletTransaction.order_id == order_id,
                    WalletTransaction.type == TransactionType.REFUND,
                )
                .first()
            )
            if existed:
                logger.warning("Refund already credited for order %s", order_id)
                return None

        user = (
            db.session.query(User)
            .filter_by(id=user_id)
            .with_for_update()
            .first()
        )  # lock the balance row
        if not user:
            raise NotFoundError("User not found")

        balance_before = user.wallet_balance
        user.credit_wallet(amount)
        balance_after = user.wallet_balance

        transaction = WalletTransaction(
            user_id=user_id,
            order_id=order_id,
            type=TransactionType.REFUND,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            description=description or "Refund",
        )

        db.session.add(transaction)
        if commit is True:
            db.session.commit()

        logger.info("Credited %s to wallet of user %s (order %s)", amount, user_id, order_id)
        return transaction

    @staticmethod
    def get_transactions(user_id: str, page: int = 1, per_page: int = 20):
        """Get wallet transactions with pagination"""
        return (
            WalletTransaction.query.filter_by(user_id=user_id)
            .order_by(WalletTransaction.created_at.desc())
            .paginate(page=page, per_page=per_page, error_out=False)
        )
