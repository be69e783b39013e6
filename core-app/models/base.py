"""
Base model for all database models.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Iterable
from extensions import db
from utils.errors import ValidationError


class BaseModel(db.Model):
    """
    Abstract base class for all database models.

    Provides common fields and functionality for all models.
    """
    __abstract__ = True

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow
    )

    @classmethod
    def column_names(cls) -> Iterable[str]:
        return [c.name for c in cls.__table__.columns]

    def update(self, **kwargs) -> None:
        """
        Update model attributes. Does not commit; the caller owns the transaction.

        Args:
            **kwargs: Key-value pairs of attributes to update

        Raises:
            ValidationError: if a key is not a column of this model
        """
        columns = set(self.column_names())
        for key, value in kwargs.items():
            if key not in columns:
                raise ValidationError(f'{type(self).__name__} has no field {key!r}')
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize column values to JSON-friendly types."""
        out = {}
        for name in self.column_names():
            value = getattr(self, name)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            elif isinstance(value, Decimal):
                value = float(value)
            out[name] = value
        return out


def check_choice(field: str, value, choices) -> Any:
    """Shared enum guard for ``@validates`` hooks. ``None`` passes through."""
    if value is not None and value not in choices:
        raise ValidationError(f'Invalid {field} {value!r}; expected one of: {", ".join(choices)}')
    return value
