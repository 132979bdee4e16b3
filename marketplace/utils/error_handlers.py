import logging

from flask import jsonify
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.exceptions import HTTPException
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from marshmallow import ValidationError
from marketplace.extensions import db
from marketplace.utils.exceptions import (
    AccountInactiveError,
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

HTTP_MESSAGES = {
    400: "Bad request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Resource not found",
    405: "Method not allowed",
}

# Business errors that escape a route keep their meaning
DOMAIN_STATUS = (
    (NotFoundError, 404),
    (AuthenticationError, 401),
    (AccountInactiveError, 403),
    (DuplicateEmailError, 409),
    (ValueError, 400),
)


def _register_domain_error(app, exc_class, status):
    @app.errorhandler(exc_class)
    def handle(error):
        return jsonify({"error": str(error)}), status


def register_error_handlers(app):
    """Register error handlers"""

    for code, message in HTTP_MESSAGES.items():
        app.register_error_handler(
            code, lambda error, message=message, code=code: (jsonify({"error": message}), code)
        )

    @app.errorhandler(500)
    def internal_error(error):
        logger.error("Internal error: %s", error)
        return jsonify({"error": "Internal server error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"error": "Validation error", "messages": error.messages}), 400

    for exc_class, status in DOMAIN_STATUS:
        _register_domain_error(app, exc_class, status)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(error):
        db.session.rollback()
        logger.warning("Integrity error: %s", error.orig)
        return jsonify({"error": "Resource conflicts with existing data"}), 409

    @app.errorhandler(SQLAlchemyError)
    def handle_sqlalchemy_error(error):
        db.session.rollback()
        logger.error("Database error", exc_info=True)
        return jsonify({"error": "Database error"}), 500

    # Tokens that fail to decode or are missing never reach a view
    @app.errorhandler(JWTExtendedException)
    def handle_jwt_error(error):
        return jsonify({"error": "Unauthorized"}), 401

    @app.errorhandler(PyJWTError)
    def handle_pyjwt_error(error):
        return jsonify({"error": "Invalid token"}), 401

    @app.errorhandler(Exception)
    def handle_exception(error):
        logger.error("Unhandled exception: %s", error, exc_info=True)
        return jsonify({"error": "An unexpected error occurred"}), 500
