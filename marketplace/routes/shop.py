from flask import Blueprint, jsonify
from marketplace.services.product_service import ProductService
from marketplace.utils.exceptions import NotFoundError

shop_bp = Blueprint("shop", __name__)


@shop_bp.route("/products", methods=["GET"])
def get_products():
    """Active, in-stock products for the public shop"""
    products = ProductService.get_active_products()
    return jsonify({"products": [p.to_dict(include_seller=True) for p in products]}), 200


@shop_bp.route("/products/<product_id>", methods=["GET"])
def get_product(product_id):
    try:
        product = ProductService.get_public_product(product_id)
        data = product.to_dict(include_seller=True)
        data["seller_email"] = product.seller.email if product.seller else None
        return jsonify({"product": data}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
