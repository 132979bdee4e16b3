import pytest
from decimal import Decimal
from marketplace import create_app, db
from marketplace.config import TestingConfig
from marketplace.enums import UserRole, ProductStatus
from marketplace.models.user import User
from marketplace.models.product import Product
from marketplace.models.cart import CartItem


@pytest.fixture(scope="function")
def app():
    """Create application for testing"""
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client"""
    return app.test_client()


def make_user(email, role, **kwargs):
    user = User(
        email=email,
        first_name=kwargs.pop("first_name", "Test"),
        last_name=kwargs.pop("last_name", role.value.title()),
        phone_number="0901234567",
        address="1 Test Street",
        role=role,
        is_verified=kwargs.pop("is_verified", True),
        is_active=True,
        **kwargs,
    )
    user.set_password("password123")
    db.session.add(user)
    db.session.commit()
    return user


# User fixtures
@pytest.fixture
def buyer_user(app):
    """Create a verified buyer"""
    return make_user("buyer@test.com", UserRole.BUYER, first_name="Bella", last_name="Buyer")


@pytest.fixture
def seller_user(app):
    """Create a verified seller with a return address"""
    return make_user(
        "seller@test.com",
        UserRole.SELLER,
        first_name="Sam",
        last_name="Seller",
        shop_name="Sam's Modest Wear",
        registration_number="REG-123",
        shop_address="10 Shop Lane",
        warehouse_address="20 Warehouse Road",
        return_address="30 Returns Avenue",
    )


@pytest.fixture
def other_seller(app):
    return make_user(
        "other-seller@test.com",
        UserRole.SELLER,
        first_name="Olive",
        last_name="Other",
        shop_name="Olive's Scarves",
        return_address="99 Other Returns Road",
    )


@pytest.fixture
def admin_user(app):
    """Create an admin user"""
    return make_user("admin@test.com", UserRole.ADMIN, first_name="Admin", last_name="User")


def login(client, email):
    response = client.post(
        "/api/auth/login", json={"email": email, "password": "password123"}
    )
    assert response.status_code == 200, f"Login failed: {response.json}"
    return {"Authorization": f"Bearer {response.json['token']}"}


# Auth header fixtures
@pytest.fixture
def buyer_headers(client, buyer_user):
    return login(client, buyer_user.email)


@pytest.fixture
def seller_headers(client, seller_user):
    return login(client, seller_user.email)


@pytest.fixture
def other_seller_headers(client, other_seller):
    return login(client, other_seller.email)


@pytest.fixture
def admin_headers(client, admin_user):
    return login(client, admin_user.email)


def make_product(seller, name, price, stock=10, code=None, **kwargs):
    product = Product(
        seller_id=seller.id,
        product_code=code or f"PROD-{name[:8].upper().replace(' ', '')}",
        name=name,
        slug=name.lower().replace(" ", "-"),
        description=f"{name} description",
        category=kwargs.pop("category", "Dresses"),
        price=Decimal(price),
        stock_quantity=stock,
        images=["https://example.com/img.jpg"],
        status=kwargs.pop("status", ProductStatus.ACTIVE),
    )
    db.session.add(product)
    db.session.commit()
    return product


# Data fixtures
@pytest.fixture
def product(app, seller_user):
    """$10 product"""
    return make_product(seller_user, "Linen Abaya", "10.00", code="PROD-0001")


@pytest.fixture
def cheap_product(app, seller_user):
    """$5 product"""
    return make_product(seller_user, "Cotton Hijab", "5.00", code="PROD-0002")


@pytest.fixture
def filled_cart(app, buyer_user, product, cheap_product):
    """2 x $10 + 1 x $5"""
    db.session.add(CartItem(user_id=buyer_user.id, product_id=product.id, quantity=2))
    db.session.add(CartItem(user_id=buyer_user.id, product_id=cheap_product.id, quantity=1))
    db.session.commit()
    return buyer_user


@pytest.fixture
def product_factory(app):
    return make_product


@pytest.fixture
def user_factory(app):
    return make_user
