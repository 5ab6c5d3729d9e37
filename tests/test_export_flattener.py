from collections import Counter

from qbank.Exam.Tag_Analytics.models.stat_tree import StudentRef
from qbank.Exam.Tag_Analytics.utils.analysis.dedup_utils import dedupe_stats_tree, compact_stats_tree
from qbank.Exam.Tag_Analytics.utils.analysis.export_flattener import (
    flatten_for_export, consolidated_student_list
)
from qbank.Exam.Tag_Analytics.utils.analysis.group_key_utils import build_group_fields
from qbank.Exam.Tag_Analytics.utils.analysis.tree_builder import build_tag_report, build_question_stats


def class_tree(responses, sections, group_by):
    question_stats = build_question_stats(responses, sections)
    root = build_tag_report(responses, sections, group_by, is_class_level=True, question_stats=question_stats)
    return dedupe_stats_tree(root)


class TestConsolidatedStudentList:
    """Semicolon-joined student labels"""

    def test_repeat_suffix(self):
        counts = Counter({StudentRef("Asha", "R1"): 2, StudentRef("Ben", "R2"): 1})
        assert consolidated_student_list(counts) == "Asha (R1) x2; Ben (R2)"

    def test_empty(self):
        assert consolidated_student_list(Counter()) == ""


class TestFlattenForExport:
    """Three row sets from one walk"""

    def test_consolidated_rows(self, responses, sections):
        tables = flatten_for_export(class_tree(responses, sections, ["section"]), ["section"], build_group_fields(sections))
        assert tables.consolidated_columns[:4] == ["Section", "Correct", "Incorrect", "Unattempted"]
        math = tables.consolidated[0]
        assert math["Section"] == "Math"
        assert (math["Correct"], math["Incorrect"], math["Unattempted"]) == (3, 2, 1)
        assert math["% Correct"] == 50.0
        assert math["CorrectStudents"] == "Asha (R1) x2; Cara (R3)"
        assert math["IncorrectStudents"] == "Ben (R2) x2"
        assert math["UnattemptedStudents"] == "Cara (R3)"

    def test_detailed_rows(self, responses, sections):
        tables = flatten_for_export(class_tree(responses, sections, ["section"]), ["section"], build_group_fields(sections))
        math_rows = [
            (r["Status"], r["Name"], r["Count"]) for r in tables.detailed if r["Section"] == "Math"
        ]
        assert math_rows == [
            ("Correct", "Asha", 2),
            ("Correct", "Cara", 1),
            ("Incorrect", "Ben", 2),
            ("Unattempted", "Cara", 1),
        ]

    def test_student_summary_spans_whole_tree(self, responses, sections):
        tables = flatten_for_export(class_tree(responses, sections, ["topic", "difficulty"]), ["topic", "difficulty"])
        summary = {row["Name"]: row for row in tables.students}
        assert list(summary) == ["Asha", "Ben", "Cara"]
        assert summary["Asha"]["Correct (%)"] == 100.0
        assert summary["Ben"]["Attempted"] == 2
        assert summary["Ben"]["Total Questions"] == 3
        assert summary["Cara"]["Unattempted (%)"] == 33.33

    def test_sorted_walk(self, responses, sections):
        tables = flatten_for_export(
            class_tree(responses, sections, ["section"]), ["section"], build_group_fields(sections), "correct", "asc"
        )
        assert [row["Section"] for row in tables.consolidated] == ["Science", "Math"]

    def test_compacted_tree_uses_node_level_students(self, responses, sections):
        root = compact_stats_tree(class_tree(responses, sections, ["section"]))
        tables = flatten_for_export(root, ["section"], build_group_fields(sections))
        assert tables.consolidated[0]["CorrectStudents"] == "Asha (R1); Cara (R3)"

    def test_single_student_tree(self, responses, sections):
        ben = StudentRef("Ben", "R2")
        root = dedupe_stats_tree(build_tag_report(responses[1:2], sections, []))
        tables = flatten_for_export(root, [], single_student=ben)
        assert tables.group_headers == []
        assert tables.consolidated[0]["IncorrectStudents"] == "Ben (R2) x2"
        assert tables.students == [{
            "Name": "Ben",
            "RollNumber": "R2",
            "Correct (%)": 0,
            "Incorrect (%)": 66.67,
            "Unattempted (%)": 33.33,
            "Total Questions": 3,
            "Attempted": 2,
            "Correct": 0,
            "Incorrect": 2,
            "Unattempted": 1,
        }]
