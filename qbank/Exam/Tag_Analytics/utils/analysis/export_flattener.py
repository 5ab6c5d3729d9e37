"""Export Flattener - tabular views of one stat tree for spreadsheet export"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from qbank.Exam.Tag_Analytics.models.stat_tree import StatNode, LeafStats, QuestionRef, StudentRef, STATUSES
from qbank.Exam.Tag_Analytics.utils.analysis.area_metrics import percent_of
from qbank.Exam.Tag_Analytics.utils.analysis.group_key_utils import group_labels
from qbank.Exam.Tag_Analytics.utils.analysis.sort_utils import sorted_children

COUNT_COLUMNS = ["Correct", "Incorrect", "Unattempted"]
PERCENT_COLUMNS = ["% Correct", "% Incorrect", "% Unattempted"]
STUDENT_LIST_COLUMNS = ["CorrectStudents", "IncorrectStudents", "UnattemptedStudents"]
DETAILED_COLUMNS = ["Status", "Name", "RollNumber", "Count"]
STUDENT_SUMMARY_COLUMNS = [
    "Name", "RollNumber", "Correct (%)", "Incorrect (%)", "Unattempted (%)",
    "Total Questions", "Attempted", "Correct", "Incorrect", "Unattempted",
]

def format_student(student: StudentRef, occurrences: int = 1) -> str:
    label = f"{student.name} ({student.roll_number})"
    return f"{label} x{occurrences}" if occurrences > 1 else label

def consolidated_student_list(counts: "Counter[StudentRef]") -> str:
    """Semicolon-joined "Name (Roll)" labels, one per distinct student"""
    return "; ".join(format_student(student, n) for student, n in counts.items())

def _status_counts(stats: LeafStats, single_student: Optional[StudentRef]) -> Dict[str, "Counter[StudentRef]"]:
    """Per-status student occurrence counts for one stat node.

    Question-level outcomes are preferred; compacted nodes fall back to their
    node-level lists, and a bare single-student node credits ``single_student``.
    """
    counts: Dict[str, Counter] = {status: Counter() for status in STATUSES}
    refs: Dict[str, QuestionRef] = {}
    for status in STATUSES:
        for ref in stats.question_refs(status):
            if isinstance(ref, QuestionRef) and ref.outcome is not None:
                refs.setdefault(ref.id, ref)
    if refs:
        for ref in refs.values():
            for status in STATUSES:
                counts[status].update(ref.outcome.students_for(status))
        return counts
    compacted = False
    for status in STATUSES:
        students = stats.node_students(status)
        if students:
            compacted = True
            counts[status].update(students)
    if not compacted and single_student is not None:
        for status in STATUSES:
            if stats.count(status):
                counts[status][single_student] = stats.count(status)
    return counts

@dataclass
class ExportTables:
    group_headers: List[str]
    consolidated: List[Dict] = field(default_factory=list)
    detailed: List[Dict] = field(default_factory=list)
    students: List[Dict] = field(default_factory=list)

    @property
    def consolidated_columns(self) -> List[str]:
        return self.group_headers + COUNT_COLUMNS + PERCENT_COLUMNS + STUDENT_LIST_COLUMNS

    @property
    def detailed_columns(self) -> List[str]:
        return self.group_headers + DETAILED_COLUMNS

    @property
    def student_columns(self) -> List[str]:
        return list(STUDENT_SUMMARY_COLUMNS)

def flatten_for_export(
    root: StatNode,
    group_by: List[str],
    group_fields: Optional[List[Dict[str, str]]] = None,
    sort_key: str = "",
    direction: str = "desc",
    single_student: Optional[StudentRef] = None,
) -> ExportTables:
    """Walk the tree once, in presentation order, emitting all three row sets"""
    headers = group_labels(group_by, group_fields)
    tables = ExportTables(group_headers=headers)
    totals: Dict[StudentRef, Dict[str, int]] = {}

    def group_columns(path: Tuple[str, ...]) -> Dict[str, str]:
        return {header: (path[i] if i < len(path) else "") for i, header in enumerate(headers)}

    def visit(node: StatNode, path: Tuple[str, ...]) -> None:
        stats = node.stats
        if stats is not None:
            columns = group_columns(path)
            counts = _status_counts(stats, single_student)
            row = dict(columns)
            for status, header in zip(STATUSES, COUNT_COLUMNS):
                row[header] = stats.count(status)
            for status, header in zip(STATUSES, PERCENT_COLUMNS):
                row[header] = percent_of(stats.count(status), stats.total)
            for status, header in zip(STATUSES, STUDENT_LIST_COLUMNS):
                row[header] = consolidated_student_list(counts[status])
            tables.consolidated.append(row)

            for status in STATUSES:
                for student, occurrences in counts[status].items():
                    tables.detailed.append({
                        **columns,
                        "Status": status.capitalize(),
                        "Name": student.name,
                        "RollNumber": student.roll_number,
                        "Count": occurrences,
                    })
                    agg = totals.setdefault(student, dict.fromkeys(STATUSES, 0))
                    agg[status] += occurrences
        for key, child in sorted_children(node, sort_key, direction):
            visit(child, path + (key,))

    visit(root, ())

    for student, agg in totals.items():
        total = sum(agg.values())
        tables.students.append({
            "Name": student.name,
            "RollNumber": student.roll_number,
            "Correct (%)": percent_of(agg["correct"], total),
            "Incorrect (%)": percent_of(agg["incorrect"], total),
            "Unattempted (%)": percent_of(agg["unattempted"], total),
            "Total Questions": total,
            "Attempted": agg["correct"] + agg["incorrect"],
            "Correct": agg["correct"],
            "Incorrect": agg["incorrect"],
            "Unattempted": agg["unattempted"],
        })
    return tables
