import logging
from datetime import timedelta

from flask import current_app
from flask_jwt_extended import create_access_token

from marketplace.models.user import User
from marketplace.models.verification_code import VerificationCode
from marketplace.extensions import db
from marketplace.enums import UserRole
from marketplace.services.notification_service import NotificationService
from marketplace.utils.exceptions import (
    AccountInactiveError,
    AuthenticationError,
    DuplicateEmailError,
    NotFoundError,
)
from marketplace.utils.helpers import generate_verification_code, utcnow_naive

logger = logging.getLogger(__name__)

SELLER_FIELDS = (
    "shop_name",
    "registration_number",
    "shop_address",
    "warehouse_address",
    "return_address",
    "business_details",
)


class AuthService:

    @staticmethod
    def find_user_by_email(email: str):
        return User.query.filter_by(email=email.lower()).first()

    @staticmethod
    def signup(email: str, password: str, first_name: str, last_name: str,
               phone_number: str, address: str, user_type: str, **kwargs) -> tuple[User, bool]:
        """Create an unverified user and send the verification code"""
        email = email.lower()
        if AuthService.find_user_by_email(email):
            raise DuplicateEmailError("User with this email already exists")

        role = UserRole(user_type)
        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone_number=phone_number,
            address=address,
            role=role,
            is_verified=False,
        )
        if role == UserRole.SELLER:
            for field in SELLER_FIELDS:
                setattr(user, field, kwargs.get(field))
        user.set_password(password)
        db.session.add(user)

        code = AuthService._save_verification_code(email, commit=False)
        db.session.commit()
        logger.info("Registered %s %s", role.value, user.id)

        email_sent = NotificationService.send_verification_email(email, code)
        if not email_sent:
            logger.error("Failed to send verification email to %s", email)
        return user, email_sent

    @staticmethod
    def _save_verification_code(email: str, commit: bool = True) -> str:
        """Replace any previous code for the email with a fresh one"""
        ttl = current_app.config.get("VERIFICATION_CODE_TTL_MINUTES", 15)
        code = generate_verification_code()

        VerificationCode.query.filter_by(email=email).delete()
        db.session.add(
            VerificationCode(
                email=email,
                code=code,
                expires_at=utcnow_naive() + timedelta(minutes=ttl),
            )
        )
        if commit:
            db.session.commit()
        return code

    @staticmethod
    def verify_email(email: str, code: str) -> User:
        email = email.lower()
        verification = (
            VerificationCode.query.filter(
                VerificationCode.email == email,
                VerificationCode.code == code,
                VerificationCode.expires_at > utcnow_naive(),
            )
            .first()
        )
        if not verification:
            raise ValueError("Invalid or expired verification code")

        user = AuthService.find_user_by_email(email)
        if not user:
            raise NotFoundError("User not found")

        user.is_verified = True
        VerificationCode.query.filter_by(email=email).delete()
        db.session.commit()
        logger.info("Verified email for user %s", user.id)

        NotificationService.send_welcome_email(user.email, user.first_name, user.role.value)
        return user

    @staticmethod
    def resend_verification(email: str) -> bool:
        user = AuthService.find_user_by_email(email)
        if not user:
            raise NotFoundError("User not found")
        if user.is_verified:
            raise ValueError("Email is already verified")

        code = AuthService._save_verification_code(user.email)
        return NotificationService.send_verification_email(user.email, code)

    @staticmethod
    def login_user(email: str, password: str) -> dict:
        """Authenticate user and generate token"""
        user = AuthService.find_user_by_email(email)

        if not user or not user.check_password(password):
            raise AuthenticationError("Invalid email or password")

        if not user.is_verified:
            raise AuthenticationError("Please verify your email before logging in")

        if not user.is_active or user.is_deleted:
            raise AccountInactiveError("Account is deactivated")

        access_token = create_access_token(
            identity=user.id,
            additional_claims={"role": user.role.value, "is_verified": user.is_verified},
        )

        return {
            "token": access_token,
            "user": user.to_dict(),
        }

    @staticmethod
    def get_user_by_id(user_id: str) -> User:
        user = db.session.get(User, user_id)
        if not user or user.is_deleted:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def create_admin(email: str, password: str, first_name: str = "Admin",
                     last_name: str = "User") -> User:
        if AuthService.find_user_by_email(email):
            raise DuplicateEmailError("User with this email already exists")

        admin = User(
            email=email.lower(),
            first_name=first_name,
            last_name=last_name,
            role=UserRole.ADMIN,
            is_verified=True,
            is_active=True,
        )
        admin.set_password(password)
        db.session.add(admin)
        db.session.commit()
        return admin
