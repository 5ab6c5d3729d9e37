"""JSON serialization utilities for MongoDB ObjectId handling"""
from bson import ObjectId
from datetime import datetime
from typing import Any, Dict, List, Union

def serialize_objectid(obj: Any) -> Any:
    """Convert ObjectId and datetime objects to JSON serializable format"""
    if isinstance(obj, ObjectId):
        return str(obj)
    elif isinstance(obj, datetime):
        return obj.isoformat()
    elif isinstance(obj, dict):
        return {key: serialize_objectid(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [serialize_objectid(item) for item in obj]
    return obj

def sanitize_mongo_document(doc: Union[Dict, List, None]) -> Union[Dict, List, None]:
    """Sanitize MongoDB document for JSON serialization with additional validation"""
    if doc is None:
        return None
    return serialize_objectid(doc)

def document_id(doc: Any) -> str:
    """String id of a document or a bare reference; empty string when absent"""
    if isinstance(doc, dict):
        value = doc.get("_id", doc.get("id"))
    else:
        value = doc
    if value is None:
        return ""
    return str(value)
