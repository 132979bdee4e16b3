from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required
from marketplace.services.wallet_service import WalletService
from marketplace.utils.decorators import role_required
from marketplace.utils.validators import validate_pagination

wallet_bp = Blueprint("wallet", __name__)


@wallet_bp.route("", methods=["GET"])
@jwt_required()
@role_required()
def get_wallet(current_user):
    return jsonify(WalletService.get_wallet(current_user.id)), 200


@wallet_bp.route("/transactions", methods=["GET"])
@jwt_required()
@role_required()
def get_transactions(current_user):
    """Get wallet transactions"""
    page, per_page = validate_pagination()
    pagination = WalletService.get_transactions(current_user.id, page, per_page)

    return (
        jsonify(
            {
                "transactions": [t.to_dict() for t in pagination.items],
                "total": pagination.total,
                "page": page,
                "pages": pagination.pages,
            }
        ),
        200,
    )
