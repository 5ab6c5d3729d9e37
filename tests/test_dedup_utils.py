from qbank.Exam.Tag_Analytics.models.stat_tree import (
    LeafStats, OptionTagRecord, QuestionRef, StatNode, StudentRef, STATUSES
)
from qbank.Exam.Tag_Analytics.utils.analysis.dedup_utils import (
    dedupe_stats_tree, compact_stats_tree, unique_students
)
from qbank.Exam.Tag_Analytics.utils.analysis.tree_builder import build_tag_report, build_question_stats


def sizes(root: StatNode):
    return [
        tuple(len(node.stats.question_refs(s)) for s in STATUSES) + (len(node.stats.option_tags),)
        for _, node in root.walk() if node.stats is not None
    ]


class TestDedupeStatsTree:
    """Removal of repeated question references and option tags"""

    def test_double_insert_keeps_one_reference(self):
        stats = LeafStats()
        stats.record("correct", QuestionRef(id="q1", number=1, section="Math"))
        stats.record("correct", QuestionRef(id="q1", number=1, section="Math"))
        dedupe_stats_tree(StatNode(stats=stats))
        assert [ref.id for ref in stats.correct_question_ids] == ["q1"]

    def test_primitive_references_compare_by_value(self):
        stats = LeafStats(incorrect_question_ids=["q1", "q1", "q2"])
        dedupe_stats_tree(StatNode(stats=stats))
        assert stats.incorrect_question_ids == ["q1", "q2"]

    def test_option_tags_keyed_by_student_roll(self):
        ben = StudentRef("Ben", "R2")
        stats = LeafStats(option_tags=[
            OptionTagRecord("option a", "Confuses numerator", False, ben),
            OptionTagRecord("option a", "Confuses numerator", False, StudentRef("Ben again", "R2")),
            OptionTagRecord("option a", "Confuses numerator", False, StudentRef("Cara", "R3")),
            OptionTagRecord("option a", "Confuses numerator", False, None),
            OptionTagRecord("option a", "Confuses numerator", False, StudentRef("", "")),
        ])
        dedupe_stats_tree(StatNode(stats=stats))
        assert [r.student.roll_number if r.student else None for r in stats.option_tags] == ["R2", "R3", None]

    def test_continues_below_a_stat_node(self):
        child = StatNode(stats=LeafStats(correct_question_ids=["q1", "q1"]))
        root = StatNode(stats=LeafStats(), children={"Math": child})
        dedupe_stats_tree(root)
        assert child.stats.correct_question_ids == ["q1"]

    def test_idempotent(self, responses, sections):
        root = build_tag_report(responses, sections, ["section", "topic"], is_class_level=True)
        once = sizes(dedupe_stats_tree(root))
        twice = sizes(dedupe_stats_tree(root))
        assert once == twice

    def test_class_tree_keeps_distinct_questions(self, responses, sections):
        root = dedupe_stats_tree(build_tag_report(responses, sections, ["section"], is_class_level=True))
        math = root.children["Math"].stats
        assert [ref.id for ref in math.correct_question_ids] == ["q1", "q2"]
        assert math.correct == 3


class TestCompactStatsTree:
    """Node-level student lists and pruned references"""

    def build(self, responses, sections, group_by):
        question_stats = build_question_stats(responses, sections)
        root = build_tag_report(responses, sections, group_by, is_class_level=True, question_stats=question_stats)
        return compact_stats_tree(dedupe_stats_tree(root))

    def test_students_move_to_node_level(self, responses, sections):
        root = self.build(responses, sections, ["section"])
        math = root.children["Math"].stats
        assert [s.name for s in math.correct_students] == ["Asha", "Cara"]
        assert [s.name for s in math.incorrect_students] == ["Ben"]
        assert [s.name for s in math.unattempted_students] == ["Cara"]

    def test_references_are_pruned(self, responses, sections):
        root = self.build(responses, sections, ["section"])
        data = root.to_dict()["Math"]
        assert data["correctQuestionIds"] == [
            {"id": "q1", "number": 1, "section": "Math"},
            {"id": "q2", "number": 2, "section": "Math"},
        ]
        assert data["correctStudents"][0] == {"name": "Asha", "rollNumber": "R1"}

    def test_empty_lists_are_omitted(self, responses, sections):
        root = self.build(responses[:1], sections, ["section"])
        data = root.to_dict()["Math"]
        assert "correctStudents" in data
        assert "incorrectStudents" not in data

    def test_unique_students_by_roll_and_name(self):
        students = [StudentRef("Asha", "R1"), StudentRef("Asha", "R1"), StudentRef("Asha", "R9")]
        assert unique_students(students) == [StudentRef("Asha", "R1"), StudentRef("Asha", "R9")]
