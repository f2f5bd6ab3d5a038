"""
ObjectId helpers shared by services.
"""

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """
    Convert a path parameter into an ObjectId.

    Returns None when the value is not a well-formed 24-hex identifier.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or len(value) != 24:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def new_id() -> str:
    """Generate a string id for an embedded sub-document."""
    return str(ObjectId())
