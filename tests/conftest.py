import os
import tempfile

os.environ.setdefault("DB_URL", "mongodb://localhost:27017")
os.environ.setdefault("TAG_ANALYTICS_LOG_DIR", tempfile.mkdtemp(prefix="tag_analytics_logs_"))

import pytest

from factories import make_tag, make_question, make_section, make_response


@pytest.fixture
def questions():
    """Three well-formed questions plus one without tags"""
    return {
        "q1": make_question("q1", [1], [
            make_tag("Topic", "Fractions"),
            make_tag("Difficulty", "Easy"),
            make_tag("option a", "Confuses numerator"),
        ]),
        "q2": make_question("q2", [0, 2], [
            make_tag("Topic", "Fractions"),
            make_tag("Difficulty", "Hard"),
        ]),
        "q_bad": make_question("q_bad", [0], None),
        "q3": make_question("q3", [3], [
            make_tag("Topic", "Plants"),
            make_tag("Difficulty", "Easy"),
        ]),
    }


@pytest.fixture
def sections(questions):
    return [
        make_section("Math", [questions["q1"], questions["q2"]]),
        make_section("Science", [questions["q_bad"], questions["q3"]]),
    ]


@pytest.fixture
def responses():
    """Asha gets everything right, Ben misses, Cara is mixed.

    Totals across the class: correct 4, incorrect 3, unattempted 2.
    """
    return [
        make_response("Asha", "R1", {
            "Math": {"q1": [1], "q2": [2, 0]},
            "Science": {"q3": [3]},
        }),
        make_response("Ben", "R2", {
            "Math": {"q1": [0], "q2": [0]},
            "Science": {"q3": []},
        }),
        make_response("Cara", "R3", {
            "Math": {"q2": [0, 2]},
            "Science": {"q3": [1]},
        }),
    ]
