from marketplace.routes.auth import auth_bp
from marketplace.routes.shop import shop_bp
from marketplace.routes.cart import cart_bp
from marketplace.routes.orders import orders_bp
from marketplace.routes.wallet import wallet_bp
from marketplace.routes.seller import seller_bp
from marketplace.routes.admin import admin_bp


def register_blueprints(app):
    """Register all blueprints"""
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(shop_bp, url_prefix='/api/shop')
    app.register_blueprint(cart_bp, url_prefix='/api/cart')
    app.register_blueprint(orders_bp, url_prefix='/api/orders')
    app.register_blueprint(wallet_bp, url_prefix='/api/wallet')
    app.register_blueprint(seller_bp, url_prefix='/api/seller')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
