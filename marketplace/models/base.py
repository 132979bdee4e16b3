from marketplace.extensions import db
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
import uuid


def utcnow():
    return datetime.now(timezone.utc)


def _serialize(value):
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    return value


class BaseModel(db.Model):
    """UUID primary key plus created/updated timestamps"""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    def update(self, commit=True, **kwargs):
        """Set known attributes; unknown keys are ignored"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
        self.updated_at = utcnow()
        if commit:
            db.session.commit()
        return self

    def to_dict(self):
        """Column values as JSON-friendly types"""
        return {
            column.name: _serialize(getattr(self, column.name))
            for column in self.__table__.columns
        }


class SoftDeleteMixin:
    """Rows are hidden by stamping deleted_at instead of being removed"""

    deleted_at = db.Column(db.DateTime, nullable=True)

    def soft_delete(self, commit=True):
        self.deleted_at = utcnow()
        if commit:
            db.session.commit()

    @property
    def is_deleted(self):
        return self.deleted_at is not None
