"""Configuration settings - Configuration Layer (Environment Separated)"""
import os
from typing import Dict, Tuple

def safe_int_env(key: str, default: str) -> int:
    """Safely convert environment variable to int"""
    try:
        return int(os.getenv(key, default))
    except ValueError:
        return int(default)

# Group-by Dimensions (Business Configuration)
MAX_GROUP_DIMENSIONS: int = safe_int_env("TAG_REPORT_MAX_GROUP_DIMENSIONS", "5")
SECTION_DIMENSION = "section"
COMPOSITE_TAG_DIMENSION = "tagtype"

# Option rationale tags are stored under synthetic tag types "option a", "option b", ...
OPTION_TAG_PREFIX = "option "
OPTION_LETTER_COUNT = 26

# Stat metrics and sorting
STAT_METRICS: Tuple[str, ...] = ("correct", "incorrect", "unattempted")
SORT_DIRECTIONS: Tuple[str, ...] = ("asc", "desc")
DEFAULT_SORT_DIRECTION = "desc"

# Insight categories: (upper bound of fail %, category, action); last bound is open
INSIGHT_THRESHOLDS: Tuple[Tuple[float, str, str], ...] = (
    (25.0, "Healthy", "No re-teach; enrichment optional."),
    (40.0, "Needs Attention", "Targeted revision."),
    (50.0, "Re-teach Recommended", "Partial re-teach."),
    (float("inf"), "Re-teach Mandatory", "Full re-teach."),
)

# Collection names (Mongo collections backing the question bank)
COLLECTIONS: Dict[str, str] = {
    "papers": "questionpapers",
    "responses": "questionpaperresponses",
    "questions": "questions",
    "tags": "tags",
    "tag_types": "tagtypes",
    "users": "users",
}

# Export Configuration
class ExportConfig:
    CONSOLIDATED_SHEET = "Consolidated"
    DETAILED_SHEET = "Detailed"
    STUDENT_SUMMARY_SHEET = "Student Summary"
    INSIGHTS_SHEET = "Insights"
    EXCEL_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    DEFAULT_FILENAME = "analytics_report"

# Logging Configuration
class LogConfig:
    MAX_LOG_SIZE = safe_int_env("TAG_ANALYTICS_MAX_LOG_BYTES", str(10 * 1024 * 1024))
    BACKUP_COUNT = safe_int_env("TAG_ANALYTICS_LOG_BACKUPS", "5")
    LOG_DIR = os.getenv("TAG_ANALYTICS_LOG_DIR", os.path.join(os.getcwd(), "logs"))
