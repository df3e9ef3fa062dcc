"""Identifier validation for MongoDB ObjectIds.

Every load-by-id goes through validate_ids() first so malformed IDs are
rejected before the database is touched.
"""

from typing import Iterable

from bson import ObjectId


def is_valid_id(value) -> bool:
    """Return True if value is a 24-character hexadecimal ObjectId string."""
    if not isinstance(value, str):
        return False
    return ObjectId.is_valid(value)


def validate_ids(ids: Iterable[str]) -> bool:
    """Return True only if every identifier is valid."""
    return all(is_valid_id(i) for i in ids)


def new_id() -> str:
    return str(ObjectId())
