"""
ScholarBeacon Backend: Document Identifier Parsing
==================================================

What:  Converts client-supplied strings into BSON ObjectIds.
How:   `parse_object_id` returns `ObjectId | None` and never raises;
       `require_object_id` raises InvalidIdentifierError (→ 400) instead.
Who:   Route handlers use `require_object_id` for ids in the URL path.
       The enrichment joiner uses `parse_object_id` on soft references, where
       a reference that is not ObjectId-shaped is matched as a plain string.
"""

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId

from scholarbeacon.exceptions import InvalidIdentifierError


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """Return `value` as an ObjectId, or None when it is absent or malformed."""
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


def require_object_id(value: Any, field: str = "id") -> ObjectId:
    object_id = parse_object_id(value)
    if object_id is None:
        raise InvalidIdentifierError(value, field=field)
    return object_id
