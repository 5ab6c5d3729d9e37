"""Stat Tree Models - Domain Layer (SoC)

The analytics tree is a recursive structure: every ``StatNode`` may carry a
``LeafStats`` payload (the three counters plus provenance lists) and a mapping of
child nodes. A node is a *leaf stat* when ``stats`` is set; it may still have
children beneath it. ``to_dict`` renders the JSON shape consumed by the UI and
export collaborators, where stat fields and child keys share one object.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

STATUSES: Tuple[str, ...] = ("correct", "incorrect", "unattempted")


@dataclass(frozen=True)
class StudentRef:
    name: str = ""
    roll_number: str = ""

    @classmethod
    def from_document(cls, student: Any) -> "StudentRef":
        """Build from a populated user document; missing fields become empty strings"""
        if not isinstance(student, dict):
            return cls()
        return cls(
            name=str(student.get("name") or ""),
            roll_number=str(student.get("rollNumber") or ""),
        )

    @property
    def key(self) -> str:
        return f"{self.roll_number}|{self.name}"

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "rollNumber": self.roll_number}


@dataclass
class QuestionOutcome:
    """Class-level outcome of one question across every response"""
    correct: int = 0
    incorrect: int = 0
    unattempted: int = 0
    correct_students: List[StudentRef] = field(default_factory=list)
    incorrect_students: List[StudentRef] = field(default_factory=list)
    unattempted_students: List[StudentRef] = field(default_factory=list)

    def record(self, status: str, student: StudentRef) -> None:
        setattr(self, status, getattr(self, status) + 1)
        self.students_for(status).append(student)

    def students_for(self, status: str) -> List[StudentRef]:
        return getattr(self, f"{status}_students")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correct": self.correct,
            "incorrect": self.incorrect,
            "unattempted": self.unattempted,
            "correctStudents": [s.to_dict() for s in self.correct_students],
            "incorrectStudents": [s.to_dict() for s in self.incorrect_students],
            "unattemptedStudents": [s.to_dict() for s in self.unattempted_students],
        }


@dataclass
class QuestionRef:
    """Reference to one question routed to a stat node"""
    id: str
    number: int
    section: str
    outcome: Optional[QuestionOutcome] = None

    def pruned(self) -> "QuestionRef":
        return QuestionRef(id=self.id, number=self.number, section=self.section)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "number": self.number, "section": self.section}
        if self.outcome is not None:
            data.update({
                "correctCount": self.outcome.correct,
                "incorrectCount": self.outcome.incorrect,
                "unattemptedCount": self.outcome.unattempted,
                "correctStudents": [s.to_dict() for s in self.outcome.correct_students],
                "incorrectStudents": [s.to_dict() for s in self.outcome.incorrect_students],
                "unattemptedStudents": [s.to_dict() for s in self.outcome.unattempted_students],
            })
        return data


@dataclass
class OptionTagRecord:
    """One (selected option, rationale tag, student) triple"""
    option: str
    tag: str
    is_correct: bool
    student: Optional[StudentRef] = None

    @property
    def dedup_key(self) -> Tuple[str, str, bool, str]:
        roll = self.student.roll_number if self.student else ""
        return (self.option, self.tag, self.is_correct, roll or "")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"option": self.option, "tag": self.tag, "isCorrect": self.is_correct}
        if self.student is not None:
            data["student"] = self.student.to_dict()
        return data


@dataclass
class LeafStats:
    correct: int = 0
    incorrect: int = 0
    unattempted: int = 0
    correct_question_ids: List[QuestionRef] = field(default_factory=list)
    incorrect_question_ids: List[QuestionRef] = field(default_factory=list)
    unattempted_question_ids: List[QuestionRef] = field(default_factory=list)
    option_tags: List[OptionTagRecord] = field(default_factory=list)
    # Representative sample for tag-chip display, last write wins; not an aggregate
    tags: List[Dict[str, str]] = field(default_factory=list)
    # Node-level student lists, only filled by the compact pass
    correct_students: Optional[List[StudentRef]] = None
    incorrect_students: Optional[List[StudentRef]] = None
    unattempted_students: Optional[List[StudentRef]] = None

    def count(self, status: str) -> int:
        return getattr(self, status)

    @property
    def total(self) -> int:
        return self.correct + self.incorrect + self.unattempted

    def question_refs(self, status: str) -> List[QuestionRef]:
        return getattr(self, f"{status}_question_ids")

    def node_students(self, status: str) -> Optional[List[StudentRef]]:
        return getattr(self, f"{status}_students")

    def record(self, status: str, ref: QuestionRef) -> None:
        setattr(self, status, getattr(self, status) + 1)
        self.question_refs(status).append(ref)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "correct": self.correct,
            "incorrect": self.incorrect,
            "unattempted": self.unattempted,
            "optionTags": [o.to_dict() for o in self.option_tags],
            "correctQuestionIds": [q.to_dict() for q in self.correct_question_ids],
            "incorrectQuestionIds": [q.to_dict() for q in self.incorrect_question_ids],
            "unattemptedQuestionIds": [q.to_dict() for q in self.unattempted_question_ids],
            "tags": [dict(t) for t in self.tags],
        }
        for status in STATUSES:
            students = self.node_students(status)
            if students:
                data[f"{status}Students"] = [s.to_dict() for s in students]
        return data


@dataclass
class StatNode:
    stats: Optional[LeafStats] = None
    children: Dict[str, "StatNode"] = field(default_factory=dict)

    @property
    def is_leaf(self) -> bool:
        return self.stats is not None

    def child(self, key: str, leaf: bool = False) -> "StatNode":
        """Get or create the child at ``key``; a leaf child always carries stats"""
        node = self.children.get(key)
        if node is None:
            node = StatNode()
            self.children[key] = node
        if leaf and node.stats is None:
            node.stats = LeafStats()
        return node

    def walk(self, path: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], "StatNode"]]:
        """Depth-first walk in insertion order yielding (path, node)"""
        yield path, self
        for key, child in self.children.items():
            yield from child.walk(path + (key,))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = self.stats.to_dict() if self.stats is not None else {}
        for key, child in self.children.items():
            data[key] = child.to_dict()
        return data
