from datetime import datetime

from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID

from ...application import db

db.JSONB, db.UUID, db.ARRAY = (JSONB, UUID, ARRAY)


class Base(db.Model):  # type: ignore
    __abstract__ = True
    created_at = db.Column(
        db.DateTime, default=datetime.utcnow, server_default=db.func.now()
    )
    updated_at = db.Column(
        db.DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        server_default=db.func.now(),
    )
