import pytest
from marketplace.extensions import db
from marketplace.models.product import Product
from marketplace.services.order_service import OrderService
from marketplace.services.admin_service import AdminService


@pytest.fixture
def delivered_order(app, filled_cart, seller_user):
    order = OrderService.create_order_from_cart(filled_cart.id, "5 Buyer Street")
    OrderService.apply_seller_action(order.id, seller_user.id, "accept")
    OrderService.apply_seller_action(order.id, seller_user.id, "deliver")
    return order


class TestAdminData:
    """Test GET /api/admin/data"""

    def test_requires_admin(self, client, buyer_headers, seller_headers):
        assert client.get("/api/admin/data", headers=buyer_headers).status_code == 403
        assert client.get("/api/admin/data", headers=seller_headers).status_code == 403

    def test_lists_users_products_orders(self, client, admin_headers, delivered_order, buyer_user):
        response = client.get("/api/admin/data", headers=admin_headers)

        assert response.status_code == 200
        data = response.json
        emails = {u["email"] for u in data["users"]}
        assert {"buyer@test.com", "seller@test.com", "admin@test.com"} <= emails
        assert "password_hash" not in data["users"][0]
        assert len(data["products"]) == 2
        assert data["orders"][0]["buyer_name"] == "Bella Buyer"

    def test_seller_earnings_split(self, client, admin_headers, delivered_order):
        response = client.get("/api/admin/data", headers=admin_headers)

        earnings = response.json["seller_earnings"]
        assert len(earnings) == 1
        assert earnings[0]["seller_name"] == "Sam Seller"
        assert earnings[0]["total_sales"] == 25.0
        assert earnings[0]["admin_commission"] == 5.0
        assert earnings[0]["seller_earnings"] == 20.0

    def test_undelivered_orders_excluded_from_earnings(self, app, filled_cart):
        OrderService.create_order_from_cart(filled_cart.id, "5 Buyer Street")

        assert AdminService.get_seller_earnings() == []

    def test_commission_rate_from_config(self, app, delivered_order):
        app.config["ADMIN_COMMISSION_RATE"] = "0.10"

        earnings = AdminService.get_seller_earnings()

        assert earnings[0]["admin_commission"] == 2.5
        assert earnings[0]["seller_earnings"] == 22.5


class TestAdminDeleteProduct:

    def test_delete_product(self, client, admin_headers, product):
        response = client.delete(f"/api/admin/products/{product.id}", headers=admin_headers)

        assert response.status_code == 200
        assert db.session.get(Product, product.id).is_deleted

    def test_delete_missing_product(self, client, admin_headers):
        response = client.delete("/api/admin/products/missing", headers=admin_headers)
        assert response.status_code == 404

    def test_seller_cannot_use_admin_delete(self, client, seller_headers, product):
        response = client.delete(f"/api/admin/products/{product.id}", headers=seller_headers)
        assert response.status_code == 403
