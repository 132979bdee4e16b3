from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from marketplace.services.order_service import OrderService
from marketplace.services.return_service import ReturnService
from marketplace.utils.decorators import role_required
from marketplace.utils.validators import validate_schema, validate_status_filter
from marketplace.utils.exceptions import NotFoundError
from marketplace.schemas import SellerOrderActionSchema
from marketplace.enums import UserRole, OrderStatus, ReturnStatus

order_seller_bp = Blueprint("orders", __name__)


@order_seller_bp.route("/orders", methods=["GET"])
@jwt_required()
@role_required(UserRole.SELLER)
def get_orders(current_user):
    """Seller's orders, optionally filtered by ?status="""
    try:
        status = validate_status_filter(OrderStatus)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    orders = OrderService.get_seller_orders(current_user.id, status)
    return jsonify({
        "orders": orders,
        "total_orders": len(orders),
        "total_amount": sum(o["total_amount"] for o in orders),
    }), 200


@order_seller_bp.route("/orders", methods=["PATCH"])
@jwt_required()
@role_required(UserRole.SELLER)
@validate_schema(SellerOrderActionSchema)
def update_order_status(current_user):
    """accept / reject / deliver / confirm_return / dispute_return"""
    data = request.validated_data
    try:
        order = OrderService.apply_seller_action(
            data["order_id"], current_user.id, data["action"]
        )
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "message": f"Order {data['action']} successful",
        "success": True,
        "order": order.to_dict(),
    }), 200


@order_seller_bp.route("/returns", methods=["GET"])
@jwt_required()
@role_required(UserRole.SELLER)
def get_returns(current_user):
    try:
        status = validate_status_filter(ReturnStatus)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    returns = ReturnService.get_seller_returns(current_user.id, status)
    return jsonify({"returns": [r.to_dict(include_order=True) for r in returns]}), 200
