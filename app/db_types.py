"""Column types shared by the models.

These work with both SQLite and PostgreSQL.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, String
from sqlalchemy.types import TypeDecorator

from app.core.security import decrypt_data, encrypt_data

# Use JSON instead of JSONB for cross-database compatibility
JSONType = JSON


class EncryptedString(TypeDecorator):
    """String column stored Fernet-encrypted, plaintext in Python."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return encrypt_data(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return decrypt_data(value)


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
