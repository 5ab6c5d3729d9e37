"""Formatting utilities - JSON serialization, document ids"""
from .json_utils import serialize_objectid, sanitize_mongo_document, document_id
