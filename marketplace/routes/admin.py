from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required
from marketplace.services.admin_service import AdminService
from marketplace.services.product_service import ProductService
from marketplace.utils.decorators import role_required
from marketplace.utils.exceptions import NotFoundError
from marketplace.enums import UserRole

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/data", methods=["GET"])
@jwt_required()
@role_required(UserRole.ADMIN)
def get_data(current_user):
    """Users, products, orders and seller earnings"""
    return jsonify(AdminService.get_dashboard_data()), 200


@admin_bp.route("/products/<product_id>", methods=["DELETE"])
@jwt_required()
@role_required(UserRole.ADMIN)
def delete_product(product_id, current_user):
    try:
        product = ProductService.admin_delete_product(product_id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify({
        "message": "Product deleted successfully",
        "product": product.to_dict(),
    }), 200
