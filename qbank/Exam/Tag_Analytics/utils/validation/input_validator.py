"""Centralized Input Validation - DRY Implementation"""
from typing import List, Optional, Tuple
from qbank.Exam.Tag_Analytics.config.settings import (
    MAX_GROUP_DIMENSIONS, STAT_METRICS, SORT_DIRECTIONS, DEFAULT_SORT_DIRECTION
)
from qbank.Exam.Tag_Analytics.exceptions.exceptions import ValidationError
from qbank.Exam.Tag_Analytics.config.log_config import get_logger

logger = get_logger("input_validator")

def parse_group_by(raw: Optional[str], limit: int = MAX_GROUP_DIMENSIONS) -> List[str]:
    """Split a CSV group-by value, trimming entries and dropping empty ones"""
    if not raw:
        return []
    parts = [part.strip() for part in raw.split(",")]
    group_by = [part for part in parts if part]
    if len(group_by) > limit:
        logger.warning(f"groupBy has {len(group_by)} dimensions, keeping the first {limit}")
        group_by = group_by[:limit]
    return group_by

def validate_sort(sort_key: Optional[str], sort_order: Optional[str]) -> Tuple[str, str]:
    """Validate sort key/direction; an empty key keeps insertion order"""
    sort_key = (sort_key or "").strip()
    sort_order = (sort_order or DEFAULT_SORT_DIRECTION).strip().lower()

    if sort_key and sort_key not in STAT_METRICS:
        raise ValidationError(f"Invalid sortKey '{sort_key}'. Allowed: {', '.join(STAT_METRICS)}")
    if sort_order not in SORT_DIRECTIONS:
        raise ValidationError(f"Invalid sortOrder '{sort_order}'. Allowed: {', '.join(SORT_DIRECTIONS)}")

    return sort_key, sort_order

def get_single_query_param(param_name, required=True):
    """Get single query parameter with validation"""
    from flask import request
    value = request.args.get(param_name)

    if required and not value:
        raise ValueError(f"Missing required parameter: {param_name}")

    return value

def get_flag_param(param_name) -> bool:
    """True when a query flag is set to 1"""
    return get_single_query_param(param_name, required=False) == "1"

def get_group_by_param() -> List[str]:
    """Parse the groupBy query parameter"""
    return parse_group_by(get_single_query_param("groupBy", required=False))

def get_sort_params() -> Tuple[str, str]:
    """Parse sortKey/sortOrder query parameters"""
    return validate_sort(
        get_single_query_param("sortKey", required=False),
        get_single_query_param("sortOrder", required=False)
    )
