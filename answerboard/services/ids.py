"""
Identifier parsing at the service boundary.

Ids reach the services as opaque strings. Anything that is not a UUID cannot
name a stored row, so it is reported as missing rather than failing the
column's bind processor.
"""
from typing import Optional

from answerboard.core.uuid_type import normalize_uuid
from answerboard.errors import NotFoundError


def parse_id(value) -> Optional[str]:
    """Canonical id string, or None if value is not a UUID."""
    try:
        return normalize_uuid(value)
    except ValueError:
        return None


def lookup_id(value, what: str) -> str:
    """Canonical id string; raises NotFoundError naming `what` for malformed ids."""
    row_id = parse_id(value)
    if row_id is None:
        raise NotFoundError(f"No {what} exists with the id of {value}")
    return row_id
