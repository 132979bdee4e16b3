import pytest
from decimal import Decimal
from marketplace.extensions import db
from marketplace.models.wallet import WalletTransaction
from marketplace.enums import TransactionType
from marketplace.services.order_service import OrderService
from marketplace.services.wallet_service import WalletService
from marketplace.utils.exceptions import NotFoundError


@pytest.fixture
def placed_order(app, filled_cart):
    return OrderService.create_order_from_cart(filled_cart.id, "5 Buyer Street")


class TestWalletService:
    """Test WalletService"""

    def test_credit_updates_balance_and_ledger(self, app, buyer_user, placed_order):
        transaction = WalletService.credit(
            buyer_user.id, Decimal("25.00"), placed_order.id, "Refund"
        )

        assert transaction.type == TransactionType.REFUND
        assert transaction.balance_before == Decimal("0.00")
        assert transaction.balance_after == Decimal("25.00")
        assert WalletService.get_balance(buyer_user.id) == Decimal("25.00")

    def test_credit_is_once_per_order(self, app, buyer_user, placed_order):
        WalletService.credit(buyer_user.id, Decimal("25.00"), placed_order.id)
        second = WalletService.credit(buyer_user.id, Decimal("25.00"), placed_order.id)

        assert second is None
        assert WalletService.get_balance(buyer_user.id) == Decimal("25.00")
        assert WalletTransaction.query.filter_by(order_id=placed_order.id).count() == 1

    def test_credit_without_commit_is_rolled_back(self, app, buyer_user, placed_order):
        WalletService.credit(buyer_user.id, Decimal("25.00"), placed_order.id, commit=False)
        db.session.rollback()

        assert WalletService.get_balance(buyer_user.id) == Decimal("0.00")
        assert WalletTransaction.query.count() == 0

    def test_credit_rejects_non_positive_amount(self, app, buyer_user):
        with pytest.raises(ValueError):
            WalletService.credit(buyer_user.id, Decimal("0.00"))

    def test_credit_unknown_user(self, app):
        with pytest.raises(NotFoundError):
            WalletService.credit("missing", Decimal("1.00"))

    def test_balance_unknown_user(self, app):
        with pytest.raises(NotFoundError):
            WalletService.get_balance("missing")


class TestWalletRoutes:
    """Test /api/wallet endpoints"""

    def test_get_wallet_starts_at_zero(self, client, buyer_headers):
        response = client.get("/api/wallet", headers=buyer_headers)

        assert response.status_code == 200
        assert response.json["wallet_balance"] == 0.0

    def test_get_wallet_after_rejection(self, client, buyer_headers, seller_headers, placed_order):
        client.patch(
            "/api/seller/orders",
            headers=seller_headers,
            json={"order_id": placed_order.id, "action": "reject"},
        )

        response = client.get("/api/wallet", headers=buyer_headers)
        assert response.json["wallet_balance"] == 25.0
        assert len(response.json["recent_transactions"]) == 1

        response = client.get("/api/wallet/transactions", headers=buyer_headers)
        assert response.status_code == 200
        assert response.json["total"] == 1
        transaction = response.json["transactions"][0]
        assert transaction["amount"] == 25.0
        assert transaction["order_id"] == placed_order.id
        assert transaction["type"] == "refund"

    def test_transactions_pagination(self, client, buyer_user, buyer_headers):
        for _ in range(3):
            WalletService.credit(buyer_user.id, Decimal("1.00"))

        response = client.get("/api/wallet/transactions?page=2&per_page=2", headers=buyer_headers)

        assert response.json["total"] == 3
        assert response.json["pages"] == 2
        assert len(response.json["transactions"]) == 1

    def test_wallet_requires_auth(self, client):
        response = client.get("/api/wallet")
        assert response.status_code == 401
