from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from marketplace.services.cart_service import CartService
from marketplace.utils.decorators import role_required
from marketplace.utils.validators import validate_schema
from marketplace.utils.exceptions import NotFoundError
from marketplace.schemas import CartAddSchema, CartUpdateSchema

cart_bp = Blueprint("cart", __name__)


@cart_bp.route("", methods=["GET"])
@jwt_required()
@role_required()
def get_cart(current_user):
    return jsonify(CartService.summary(current_user.id)), 200


@cart_bp.route("", methods=["POST"])
@jwt_required()
@role_required()
@validate_schema(CartAddSchema)
def add_to_cart(current_user):
    try:
        data = request.validated_data
        cart_item = CartService.add_to_cart(current_user.id, data["product_id"], data["quantity"])
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    summary = CartService.summary(current_user.id)
    return jsonify({
        "message": "Item added to cart",
        "cart_item": cart_item.to_dict(),
        "item_count": summary["item_count"],
        "total": summary["total"],
    }), 200


@cart_bp.route("", methods=["PUT"])
@jwt_required()
@role_required()
@validate_schema(CartUpdateSchema)
def update_cart_item(current_user):
    try:
        data = request.validated_data
        cart_item = CartService.update_quantity(data["cart_item_id"], current_user.id, data["quantity"])
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    summary = CartService.summary(current_user.id)
    return jsonify({
        "message": "Cart item updated",
        "cart_item": cart_item.to_dict(),
        "item_count": summary["item_count"],
        "total": summary["total"],
    }), 200


@cart_bp.route("", methods=["DELETE"])
@jwt_required()
@role_required()
def remove_from_cart(current_user):
    cart_item_id = request.args.get("id")
    if not cart_item_id:
        return jsonify({"error": "Cart item ID is required"}), 400

    try:
        CartService.remove_from_cart(cart_item_id, current_user.id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    summary = CartService.summary(current_user.id)
    return jsonify({
        "message": "Item removed from cart",
        "item_count": summary["item_count"],
        "total": summary["total"],
    }), 200
