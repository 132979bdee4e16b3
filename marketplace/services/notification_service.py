import logging
from flask import current_app

logger = logging.getLogger(__name__)


class NotificationService:
    """Outgoing account emails.

    Delivery is handed to the log; a mail transport can be plugged in by
    overriding ``send_email``.
    """

    @staticmethod
    def send_email(to: str, subject: str, body: str) -> bool:
        if not current_app.config.get("MAIL_ENABLED", True):
            logger.warning("Email disabled, dropping message to %s: %s", to, subject)
            return False

        sender = current_app.config.get("MAIL_FROM")
        logger.info("Email from=%s to=%s subject=%s\n%s", sender, to, subject, body)
        return True

    @staticmethod
    def send_verification_email(email: str, code: str) -> bool:
        ttl = current_app.config.get("VERIFICATION_CODE_TTL_MINUTES", 15)
        body = (
            "Thank you for signing up with ModestMuse!\n"
            f"Your verification code is: {code}\n"
            f"This code will expire in {ttl} minutes."
        )
        return NotificationService.send_email(email, "Verify Your Email - ModestMuse", body)

    @staticmethod
    def send_welcome_email(email: str, first_name: str, role: str) -> bool:
        body = (
            f"Hello {first_name},\n"
            f"Thank you for joining ModestMuse as a {role}!\n"
            "Your account has been verified and you can now start using our platform."
        )
        return NotificationService.send_email(email, f"Welcome to ModestMuse, {first_name}!", body)
