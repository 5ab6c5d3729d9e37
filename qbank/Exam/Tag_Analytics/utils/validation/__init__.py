"""Validation utilities - Query parameter parsing and validation"""
from .input_validator import (
    parse_group_by, validate_sort, get_single_query_param, get_flag_param,
    get_group_by_param, get_sort_params
)
