from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity, set_access_cookies, unset_jwt_cookies
from marketplace.services.auth_service import AuthService
from marketplace.schemas import SignupSchema, LoginSchema, VerifyEmailSchema, ResendVerificationSchema
from marketplace.utils.validators import validate_schema
from marketplace.utils.exceptions import (
    AccountInactiveError,
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/signup", methods=["POST"])
@validate_schema(SignupSchema)
def signup():
    """Register a buyer or seller and send the verification code"""
    try:
        data = request.validated_data
        user, email_sent = AuthService.signup(**data)
    except DuplicateEmailError as e:
        return jsonify({"error": str(e)}), 409
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not email_sent:
        message = (
            "User created successfully, but failed to send verification email. "
            "Please use the resend option on the verification page."
        )
    else:
        message = "User created successfully. Please check your email for verification code."

    return jsonify({"message": message, "user_id": user.id, "email_sent": email_sent}), 201


@auth_bp.route("/verify-email", methods=["POST"])
@validate_schema(VerifyEmailSchema)
def verify_email():
    try:
        data = request.validated_data
        AuthService.verify_email(data["email"], data["code"])
        return jsonify({"message": "Email verified successfully"}), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400


@auth_bp.route("/resend-verification", methods=["POST"])
@validate_schema(ResendVerificationSchema)
def resend_verification():
    try:
        email_sent = AuthService.resend_verification(request.validated_data["email"])
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if not email_sent:
        return jsonify({"error": "Failed to send verification email"}), 500
    return jsonify({"message": "Verification code sent successfully"}), 200


@auth_bp.route("/login", methods=["POST"])
@validate_schema(LoginSchema)
def login():
    """User login"""
    try:
        data = request.validated_data
        result = AuthService.login_user(data["email"], data["password"])
    except AuthenticationError as e:
        return jsonify({"error": str(e)}), 401
    except AccountInactiveError as e:
        return jsonify({"error": str(e)}), 403

    response = jsonify(result)
    set_access_cookies(response, result["token"])
    return response, 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    response = jsonify({"message": "Logged out"})
    unset_jwt_cookies(response)
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def get_me():
    """Get current user info"""
    try:
        user_id = get_jwt_identity()
        user = AuthService.get_user_by_id(user_id)
        return jsonify({"user": user.to_dict()}), 200
    except ValueError as e:
        return jsonify({"error": str(e)}), 404
