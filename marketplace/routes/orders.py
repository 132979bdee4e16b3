from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from marketplace.services.order_service import OrderService
from marketplace.services.return_service import ReturnService
from marketplace.utils.decorators import role_required
from marketplace.utils.validators import validate_schema
from marketplace.utils.exceptions import NotFoundError
from marketplace.schemas import OrderCreateSchema, ReturnRequestSchema

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("", methods=["POST"])
@jwt_required()
@role_required()
@validate_schema(OrderCreateSchema)
def create_order(current_user):
    """Place an order from the current cart"""
    try:
        order = OrderService.create_order_from_cart(
            current_user.id, request.validated_data["delivery_address"]
        )
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return (
        jsonify(
            {
                "message": "Order created successfully",
                "order": order.to_dict(include_items=True),
            }
        ),
        201,
    )


@orders_bp.route("", methods=["GET"])
@jwt_required()
@role_required()
def get_orders(current_user):
    orders = OrderService.get_user_orders(current_user.id)
    return jsonify({"orders": [o.to_dict() for o in orders]}), 200


@orders_bp.route("/history", methods=["GET"])
@jwt_required()
@role_required()
def get_order_history(current_user):
    """Orders with items, item count and return status"""
    return jsonify(OrderService.get_order_history(current_user.id)), 200


@orders_bp.route("/returns", methods=["GET"])
@jwt_required()
@role_required()
def get_returns(current_user):
    returns = ReturnService.get_user_returns(current_user.id)
    return jsonify({"returns": [r.to_dict(include_order=True) for r in returns]}), 200


@orders_bp.route("/<order_id>", methods=["GET"])
@jwt_required()
@role_required()
def get_order(order_id, current_user):
    try:
        order = OrderService.get_order(order_id, current_user.id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    data = order.to_dict()
    return jsonify({
        "order": data,
        "items": [item.to_dict() for item in order.items],
        "return_order": order.return_order.to_dict() if order.return_order else None,
    }), 200


@orders_bp.route("/<order_id>/return", methods=["POST"])
@jwt_required()
@role_required()
@validate_schema(ReturnRequestSchema)
def request_return(order_id, current_user):
    try:
        return_order = ReturnService.request_return(
            order_id, current_user.id, request.validated_data["reason"]
        )
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "message": "Return requested successfully",
        "return_order": return_order.to_dict(include_order=True),
    }), 201


@orders_bp.route("/<order_id>/return/delivered", methods=["PUT"])
@jwt_required()
@role_required()
def mark_return_delivered(order_id, current_user):
    try:
        return_order = ReturnService.mark_return_delivered(order_id, current_user.id)
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "message": "Return marked as delivered",
        "return_order": return_order.to_dict(include_order=True),
    }), 200
