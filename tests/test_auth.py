import pytest
from datetime import timedelta
from marketplace.extensions import db
from marketplace.models.user import User
from marketplace.models.verification_code import VerificationCode
from marketplace.utils.helpers import utcnow_naive


BUYER_SIGNUP = {
    "email": "new.buyer@test.com",
    "password": "password123",
    "first_name": "Nadia",
    "last_name": "New",
    "phone_number": "0123456789",
    "address": "5 Buyer Street",
    "user_type": "buyer",
}

SELLER_SIGNUP = {
    **BUYER_SIGNUP,
    "email": "new.seller@test.com",
    "user_type": "seller",
    "shop_name": "New Shop",
    "registration_number": "REG-999",
    "shop_address": "1 Shop St",
    "warehouse_address": "2 Warehouse St",
    "return_address": "3 Return St",
}


class TestSignup:
    """Test user registration"""

    def test_signup_buyer_creates_unverified_user(self, client):
        response = client.post("/api/auth/signup", json=BUYER_SIGNUP)

        assert response.status_code == 201
        assert response.json["email_sent"] is True
        user = db.session.get(User, response.json["user_id"])
        assert user.is_verified is False
        assert user.role == "buyer"
        assert user.shop_name is None
        assert VerificationCode.query.filter_by(email=user.email).count() == 1

    def test_signup_seller_stores_business_profile(self, client):
        response = client.post("/api/auth/signup", json=SELLER_SIGNUP)

        assert response.status_code == 201
        user = db.session.get(User, response.json["user_id"])
        assert user.role == "seller"
        assert user.return_address == "3 Return St"

    def test_signup_seller_missing_shop_fields(self, client):
        data = {**BUYER_SIGNUP, "user_type": "seller"}
        response = client.post("/api/auth/signup", json=data)

        assert response.status_code == 400
        assert "shop_name" in response.json["messages"]
        assert "return_address" in response.json["messages"]

    def test_signup_invalid_user_type(self, client):
        response = client.post("/api/auth/signup", json={**BUYER_SIGNUP, "user_type": "admin"})
        assert response.status_code == 400

    def test_signup_short_password(self, client):
        response = client.post("/api/auth/signup", json={**BUYER_SIGNUP, "password": "123"})
        assert response.status_code == 400

    def test_signup_duplicate_email(self, client, buyer_user):
        response = client.post("/api/auth/signup", json={**BUYER_SIGNUP, "email": buyer_user.email})

        assert response.status_code == 409
        assert "already exists" in response.json["error"]


class TestEmailVerification:

    def _signup(self, client):
        client.post("/api/auth/signup", json=BUYER_SIGNUP)
        return VerificationCode.query.filter_by(email=BUYER_SIGNUP["email"]).first()

    def test_verify_email_success(self, client):
        verification = self._signup(client)

        response = client.post(
            "/api/auth/verify-email",
            json={"email": BUYER_SIGNUP["email"], "code": verification.code},
        )

        assert response.status_code == 200
        user = User.query.filter_by(email=BUYER_SIGNUP["email"]).first()
        assert user.is_verified is True
        assert VerificationCode.query.filter_by(email=user.email).count() == 0

    def test_verify_email_wrong_code(self, client):
        verification = self._signup(client)
        wrong = "000000" if verification.code != "000000" else "111111"

        response = client.post(
            "/api/auth/verify-email",
            json={"email": BUYER_SIGNUP["email"], "code": wrong},
        )

        assert response.status_code == 400
        assert "Invalid or expired" in response.json["error"]

    def test_verify_email_expired_code(self, client):
        verification = self._signup(client)
        verification.expires_at = utcnow_naive() - timedelta(minutes=1)
        db.session.commit()

        response = client.post(
            "/api/auth/verify-email",
            json={"email": BUYER_SIGNUP["email"], "code": verification.code},
        )

        assert response.status_code == 400

    def test_verify_email_code_must_be_six_chars(self, client):
        response = client.post(
            "/api/auth/verify-email", json={"email": BUYER_SIGNUP["email"], "code": "123"}
        )
        assert response.status_code == 400

    def test_resend_replaces_previous_code(self, client):
        self._signup(client)

        response = client.post(
            "/api/auth/resend-verification", json={"email": BUYER_SIGNUP["email"]}
        )

        assert response.status_code == 200
        assert VerificationCode.query.filter_by(email=BUYER_SIGNUP["email"]).count() == 1

    def test_resend_unknown_user(self, client):
        response = client.post("/api/auth/resend-verification", json={"email": "ghost@test.com"})
        assert response.status_code == 404

    def test_resend_already_verified(self, client, buyer_user):
        response = client.post("/api/auth/resend-verification", json={"email": buyer_user.email})

        assert response.status_code == 400
        assert "already verified" in response.json["error"]


class TestLogin:
    """Test user login"""

    def test_login_success_sets_cookie(self, client, buyer_user):
        response = client.post(
            "/api/auth/login", json={"email": "buyer@test.com", "password": "password123"}
        )

        assert response.status_code == 200
        assert "token" in response.json
        assert "password_hash" not in response.json["user"]
        cookies = response.headers.getlist("Set-Cookie")
        assert any(c.startswith("token=") and "HttpOnly" in c for c in cookies)

    def test_login_invalid_password(self, client, buyer_user):
        response = client.post(
            "/api/auth/login", json={"email": "buyer@test.com", "password": "wrongpassword"}
        )

        assert response.status_code == 401
        assert "Invalid email or password" in response.json["error"]

    def test_login_unknown_email(self, client):
        response = client.post(
            "/api/auth/login", json={"email": "nobody@test.com", "password": "password123"}
        )
        assert response.status_code == 401

    def test_login_unverified(self, client, buyer_user):
        buyer_user.is_verified = False
        db.session.commit()

        response = client.post(
            "/api/auth/login", json={"email": "buyer@test.com", "password": "password123"}
        )

        assert response.status_code == 401
        assert "verify your email" in response.json["error"]

    def test_login_inactive_user(self, client, buyer_user):
        buyer_user.is_active = False
        db.session.commit()

        response = client.post(
            "/api/auth/login", json={"email": "buyer@test.com", "password": "password123"}
        )

        assert response.status_code == 403


class TestToken:

    def test_get_me_with_header(self, client, buyer_headers):
        response = client.get("/api/auth/me", headers=buyer_headers)

        assert response.status_code == 200
        assert response.json["user"]["email"] == "buyer@test.com"

    def test_get_me_with_cookie(self, client, buyer_user):
        client.post(
            "/api/auth/login", json={"email": "buyer@test.com", "password": "password123"}
        )

        response = client.get("/api/auth/me")

        assert response.status_code == 200

    def test_logout_clears_cookie(self, client, buyer_user):
        client.post(
            "/api/auth/login", json={"email": "buyer@test.com", "password": "password123"}
        )
        client.post("/api/auth/logout")

        response = client.get("/api/auth/me")

        assert response.status_code == 401

    def test_get_me_without_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401

    def test_get_me_invalid_token(self, client):
        response = client.get(
            "/api/auth/me", headers={"Authorization": "Bearer invalid-token"}
        )
        assert response.status_code == 401

    def test_wrong_role_is_forbidden(self, client, buyer_headers):
        response = client.get("/api/seller/products", headers=buyer_headers)
        assert response.status_code == 403
