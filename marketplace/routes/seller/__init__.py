from flask import Blueprint
from .product_routes import product_seller_bp
from .order_routes import order_seller_bp

seller_bp = Blueprint("seller", __name__)

seller_bp.register_blueprint(product_seller_bp, url_prefix="/products")
seller_bp.register_blueprint(order_seller_bp)
