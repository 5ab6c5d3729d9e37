from qbank.Exam.Tag_Analytics.utils.analysis.group_key_utils import (
    resolve_group_key, build_group_fields, group_labels, get_tag_value
)
from factories import make_question, make_section, make_tag


class TestResolveGroupKey:
    """Branch keys per dimension"""

    def test_section_is_verbatim(self, questions):
        assert resolve_group_key(questions["q1"], "section", "Math") == "Math"

    def test_tag_type_lookup_is_case_insensitive(self, questions):
        assert resolve_group_key(questions["q1"], "topic", "Math") == "Fractions"
        assert resolve_group_key(questions["q1"], "DIFFICULTY", "Math") == "Easy"

    def test_missing_type_gives_placeholder(self, questions):
        assert resolve_group_key(questions["q2"], "chapter", "Math") == "Unknown Chapter"

    def test_composite_key_keeps_stored_order(self, questions):
        assert resolve_group_key(questions["q2"], "tagtype", "Math") == "Topic: Fractions, Difficulty: Hard"

    def test_composite_key_with_untyped_tag(self):
        question = make_question("qx", [0], [make_tag(None, "Loose")])
        assert resolve_group_key(question, "tagtype", "Math") == "Other: Loose"

    def test_first_matching_tag_wins(self):
        tags = [make_tag("Topic", "Fractions"), make_tag("Topic", "Decimals")]
        assert get_tag_value(tags, "topic") == "Fractions"

    def test_never_raises_on_malformed_question(self):
        assert resolve_group_key({"tags": "bad"}, "topic", None) == "Unknown Topic"
        assert resolve_group_key({}, "section", None) == "Unknown Section"


class TestBuildGroupFields:
    """Grouping choices derived from the paper"""

    def test_section_first_then_types_in_first_seen_order(self, sections):
        fields = build_group_fields(sections)
        assert fields[0] == {"value": "section", "label": "Section"}
        assert [f["label"] for f in fields[1:]] == ["Topic", "Difficulty", "option a"]
        assert fields[1]["value"] == "topic"

    def test_bare_ids_are_ignored(self):
        assert build_group_fields([make_section("Math", ["q1"])]) == [{"value": "section", "label": "Section"}]

    def test_labels_fall_back_to_dimension(self, sections):
        assert group_labels(["topic", "chapter"], build_group_fields(sections)) == ["Topic", "chapter"]
