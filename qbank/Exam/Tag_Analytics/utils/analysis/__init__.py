"""Analysis utilities - tag report tree, projections and exports"""
from .answer_utils import (
    build_answer_map, evaluate_answer, selected_options, same_option_set, option_tag_type,
    CORRECT, INCORRECT, UNATTEMPTED,
)
from .group_key_utils import (
    resolve_group_key, build_group_fields, group_labels,
)
from .tree_builder import (
    build_tag_report, build_question_stats, iter_paper_questions,
)
from .dedup_utils import (
    dedupe_stats_tree, compact_stats_tree, unique_students,
)
from .sort_utils import (
    get_stats_sum, sort_child_keys, sorted_children, sort_stats_tree,
)
from .area_metrics import build_student_area_metrics, area_label
from .insights_utils import (
    categorize_fail_pct, compute_insights_for_last_tag, compute_student_insights,
)
from .export_flattener import (
    flatten_for_export, consolidated_student_list, ExportTables,
)
