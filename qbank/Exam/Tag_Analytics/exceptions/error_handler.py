"""Centralized error handling and responses - DRY principle"""
from typing import Tuple
from qbank.Exam.Tag_Analytics.config.log_config import get_logger
from qbank.Exam.Tag_Analytics.exceptions.exceptions import (
    ValidationError, PaperNotFoundError, ResponseNotFoundError
)

logger = get_logger("error_handler")


# ============= ERROR HANDLERS =============

def handle_service_error(e: Exception) -> Tuple[dict, int]:
    """Centralized error handling for services"""

    if isinstance(e, ValidationError):
        return {"success": False, "message": str(e)}, 400

    elif isinstance(e, (PaperNotFoundError, ResponseNotFoundError)):
        return {"success": False, "message": str(e)}, 404

    elif isinstance(e, ValueError):
        return {"success": False, "message": str(e)}, 400

    else:
        sanitized_error = str(e).replace('\n', ' ').replace('\r', ' ')[:500]
        logger.error(f"Unexpected error: {sanitized_error}")
        return {"success": False, "message": "Server error"}, 500
