from marketplace.models.base import BaseModel
from marketplace.extensions import db


class VerificationCode(BaseModel):
    """One-time email verification code"""

    __tablename__ = "verification_codes"

    email = db.Column(db.String(255), nullable=False, index=True)
    code = db.Column(db.String(6), nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
