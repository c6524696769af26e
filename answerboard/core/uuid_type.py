"""
UUID column type that behaves the same on SQLite and PostgreSQL.

Identifiers are stored as CHAR(36) strings and always surface as canonical
lowercase UUID strings, so callers can compare ids from the URL directly.
"""
import uuid
from sqlalchemy import TypeDecorator, String


def new_id() -> str:
    return str(uuid.uuid4())


def normalize_uuid(value) -> str:
    """Canonical string form of a UUID; raises ValueError for anything else."""
    if isinstance(value, uuid.UUID):
        return str(value)
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, AttributeError):
        raise ValueError(f"Invalid UUID: {value!r}")


class UUIDType(TypeDecorator):
    impl = String
    cache_ok = True

    def load_dialect_impl(self, dialect):
        return dialect.type_descriptor(String(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return normalize_uuid(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return normalize_uuid(value)
