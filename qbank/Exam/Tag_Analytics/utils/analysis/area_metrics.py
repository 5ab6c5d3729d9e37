"""Area Metrics - per-student "area x correctness" rows for remedial reporting"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from qbank.Exam.Tag_Analytics.models.stat_tree import StatNode, LeafStats, QuestionRef, StudentRef, STATUSES
from qbank.Exam.Tag_Analytics.utils.analysis.group_key_utils import group_labels
from qbank.Exam.Tag_Analytics.utils.analysis.sort_utils import sorted_children

def percent_of(part: int, total: int) -> float:
    return round(part / total * 100, 2) if total else 0

@dataclass
class AreaRow:
    area: str
    path: Tuple[str, ...] = ()
    correct: int = 0
    incorrect: int = 0
    unattempted: int = 0

    @property
    def total(self) -> int:
        return self.correct + self.incorrect + self.unattempted

    @property
    def percent(self) -> float:
        return percent_of(self.correct, self.total)

    def add(self, status: str, amount: int = 1) -> None:
        setattr(self, status, getattr(self, status) + amount)

    def to_dict(self) -> Dict:
        return {
            "area": self.area,
            "correct": self.correct,
            "incorrect": self.incorrect,
            "unattempted": self.unattempted,
            "total": self.total,
            "percent": self.percent,
        }

@dataclass
class StudentAreaMetrics:
    name: str
    roll: str
    rows_by_area: Dict[str, AreaRow] = field(default_factory=dict)

    def row(self, area: str, path: Tuple[str, ...]) -> AreaRow:
        if area not in self.rows_by_area:
            self.rows_by_area[area] = AreaRow(area=area, path=path)
        return self.rows_by_area[area]

    @property
    def rows(self) -> List[AreaRow]:
        return list(self.rows_by_area.values())

    def to_dict(self) -> Dict:
        return {"name": self.name, "rollNumber": self.roll, "rows": [r.to_dict() for r in self.rows]}

def area_label(path: Tuple[str, ...], labels: List[str]) -> str:
    """Each level of the path as "Label: value", joined with " / "."""
    parts = []
    for depth, value in enumerate(path):
        label = labels[depth] if depth < len(labels) else ""
        parts.append(f"{label}: {value}" if label else value)
    return " / ".join(parts)

def _distinct_refs(stats: LeafStats) -> List[QuestionRef]:
    refs: Dict[str, QuestionRef] = {}
    for status in STATUSES:
        for ref in stats.question_refs(status):
            if isinstance(ref, QuestionRef):
                refs.setdefault(ref.id, ref)
    return list(refs.values())

def build_student_area_metrics(
    root: StatNode,
    group_by: List[str],
    group_fields: Optional[List[Dict[str, str]]] = None,
    sort_key: str = "",
    direction: str = "desc",
    single_student: Optional[StudentRef] = None,
) -> Dict[str, StudentAreaMetrics]:
    """Walk the tree and credit each student per area.

    Two paths, chosen by data shape at every stat node:
    - rich: question refs carry class-level student lists; each distinct
      question credits every listed student once for its status.
    - compact fallback: no per-question student lists survive (single-student
      tree or compacted payload); ``single_student`` is credited with the node's
      own counters.
    """
    labels = group_labels(group_by, group_fields)
    metrics: Dict[str, StudentAreaMetrics] = {}

    def entry_for(student: StudentRef) -> StudentAreaMetrics:
        if student.key not in metrics:
            metrics[student.key] = StudentAreaMetrics(name=student.name, roll=student.roll_number)
        return metrics[student.key]

    def visit(node: StatNode, path: Tuple[str, ...]) -> None:
        if node.stats is not None:
            area = area_label(path, labels)
            refs = _distinct_refs(node.stats)
            rich = [ref for ref in refs if ref.outcome is not None]
            if rich:
                for ref in rich:
                    for status in STATUSES:
                        for student in ref.outcome.students_for(status):
                            entry_for(student).row(area, path).add(status)
            elif single_student is not None:
                row = entry_for(single_student).row(area, path)
                for status in STATUSES:
                    row.add(status, node.stats.count(status))
        for key, child in sorted_children(node, sort_key, direction):
            visit(child, path + (key,))

    visit(root, ())
    return metrics
