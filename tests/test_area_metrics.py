from qbank.Exam.Tag_Analytics.models.stat_tree import LeafStats, StatNode, StudentRef
from qbank.Exam.Tag_Analytics.utils.analysis.area_metrics import build_student_area_metrics, area_label
from qbank.Exam.Tag_Analytics.utils.analysis.dedup_utils import dedupe_stats_tree, compact_stats_tree
from qbank.Exam.Tag_Analytics.utils.analysis.group_key_utils import build_group_fields
from qbank.Exam.Tag_Analytics.utils.analysis.tree_builder import build_tag_report, build_question_stats


def class_tree(responses, sections, group_by):
    question_stats = build_question_stats(responses, sections)
    root = build_tag_report(responses, sections, group_by, is_class_level=True, question_stats=question_stats)
    return dedupe_stats_tree(root)


class TestAreaLabel:
    """Human-readable area names"""

    def test_joins_labels_and_values(self):
        assert area_label(("Fractions", "Hard"), ["Topic", "Difficulty"]) == "Topic: Fractions / Difficulty: Hard"

    def test_root_area_is_empty(self):
        assert area_label((), []) == ""


class TestRichPath:
    """Crediting from per-question student lists"""

    def test_rows_per_student_and_area(self, responses, sections):
        root = class_tree(responses, sections, ["section"])
        metrics = build_student_area_metrics(root, ["section"], build_group_fields(sections))
        assert list(metrics) == ["R1|Asha", "R2|Ben", "R3|Cara"]

        asha = {row.area: row.to_dict() for row in metrics["R1|Asha"].rows}
        assert asha["Section: Math"]["correct"] == 2
        assert asha["Section: Science"]["percent"] == 100.0

        ben = {row.area: row for row in metrics["R2|Ben"].rows}
        assert (ben["Section: Math"].incorrect, ben["Section: Science"].unattempted) == (2, 1)
        assert ben["Section: Math"].percent == 0

    def test_student_totals_match_their_responses(self, responses, sections):
        root = class_tree(responses, sections, ["topic", "difficulty"])
        metrics = build_student_area_metrics(root, ["topic", "difficulty"], build_group_fields(sections))
        for entry in metrics.values():
            assert sum(row.total for row in entry.rows) == 3

    def test_rows_follow_sort_order(self, responses, sections):
        root = class_tree(responses, sections, ["section"])
        metrics = build_student_area_metrics(root, ["section"], build_group_fields(sections), "correct", "asc")
        assert [row.area for row in metrics["R1|Asha"].rows] == ["Section: Science", "Section: Math"]


class TestCompactFallback:
    """Crediting a single known student from node counters"""

    def test_percent_from_node_counters(self):
        root = StatNode(children={"Fractions": StatNode(stats=LeafStats(correct=3, incorrect=1, unattempted=0))})
        student = StudentRef("Asha", "R1")
        metrics = build_student_area_metrics(root, ["topic"], single_student=student)
        row = metrics[student.key].rows[0]
        assert row.to_dict() == {
            "area": "topic: Fractions",
            "correct": 3,
            "incorrect": 1,
            "unattempted": 0,
            "total": 4,
            "percent": 75.0,
        }

    def test_compacted_single_student_tree(self, responses, sections):
        root = compact_stats_tree(dedupe_stats_tree(build_tag_report(responses[2:], sections, ["section"])))
        cara = StudentRef("Cara", "R3")
        metrics = build_student_area_metrics(root, ["section"], build_group_fields(sections), single_student=cara)
        rows = {row.area: (row.correct, row.incorrect, row.unattempted) for row in metrics[cara.key].rows}
        assert rows == {"Section: Math": (1, 0, 1), "Section: Science": (0, 1, 0)}

    def test_no_student_lists_and_no_known_student(self, responses, sections):
        root = build_tag_report(responses[:1], sections, ["section"])
        assert build_student_area_metrics(root, ["section"]) == {}

    def test_empty_area_has_zero_percent(self):
        root = StatNode(stats=LeafStats())
        metrics = build_student_area_metrics(root, [], single_student=StudentRef("Asha", "R1"))
        assert metrics["R1|Asha"].rows[0].percent == 0
