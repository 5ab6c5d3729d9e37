"""Security utilities - ObjectId guards for path parameters"""
from typing import Any, Optional
from bson import ObjectId
from bson.errors import InvalidId

def validate_object_id(obj_id: Any) -> str:
    """Validate and return ObjectId as string"""
    if isinstance(obj_id, dict):
        raise ValueError("ObjectId cannot be dict (NoSQL injection attempt)")
    try:
        return str(ObjectId(obj_id))
    except (InvalidId, TypeError):
        raise ValueError("Invalid ObjectId format")

def to_object_id(obj_id: Any) -> Optional[ObjectId]:
    """ObjectId for a lookup, or None when the id is empty or malformed"""
    if isinstance(obj_id, ObjectId):
        return obj_id
    if not obj_id:
        return None
    try:
        return ObjectId(validate_object_id(obj_id))
    except ValueError:
        return None
