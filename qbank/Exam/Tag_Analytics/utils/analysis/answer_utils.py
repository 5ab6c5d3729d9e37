"""Answer Utilities - response normalization and correctness evaluation"""
from typing import Any, Dict, List, Optional
from qbank.Exam.Tag_Analytics.config.settings import OPTION_TAG_PREFIX, OPTION_LETTER_COUNT
from qbank.Exam.Tag_Analytics.utils.formatting.json_utils import document_id

CORRECT = "correct"
INCORRECT = "incorrect"
UNATTEMPTED = "unattempted"

def build_answer_map(response: Dict) -> Dict[str, Dict[str, Dict]]:
    """Index one response as sectionName -> questionId -> submitted answer.

    A repeated section name or question id overwrites the earlier occurrence.
    The answer's ``question`` may be populated or a bare id.
    """
    answer_map: Dict[str, Dict[str, Dict]] = {}
    if not isinstance(response, dict):
        return answer_map

    for section in response.get("sectionAnswers") or []:
        if not isinstance(section, dict):
            continue
        section_answers: Dict[str, Dict] = {}
        answer_map[section.get("sectionName")] = section_answers
        for answer in section.get("answers") or []:
            if not isinstance(answer, dict):
                continue
            section_answers[document_id(answer.get("question"))] = answer
    return answer_map

def selected_options(answer: Optional[Dict]) -> List[Any]:
    """Selected option indices, empty when absent or not a list"""
    if not isinstance(answer, dict):
        return []
    selected = answer.get("selectedOptions")
    return selected if isinstance(selected, list) else []

def same_option_set(selected: List[Any], answer_indexes: List[Any]) -> bool:
    """Order-independent comparison; equal length and equal sorted contents"""
    if not isinstance(selected, list) or not isinstance(answer_indexes, list):
        return False
    if len(selected) != len(answer_indexes):
        return False
    return sorted(selected, key=str) == sorted(answer_indexes, key=str)

def evaluate_answer(answer: Optional[Dict], answer_indexes: Any) -> str:
    """Verdict for one (question, submitted answer) pair; no partial credit"""
    selected = selected_options(answer)
    if not selected:
        return UNATTEMPTED
    if same_option_set(selected, answer_indexes if isinstance(answer_indexes, list) else []):
        return CORRECT
    return INCORRECT

def option_tag_type(option_index: Any) -> Optional[str]:
    """Synthetic tag type for an option index (0 -> "option a"); None if not an index"""
    if isinstance(option_index, bool) or not isinstance(option_index, int):
        return None
    if not 0 <= option_index < OPTION_LETTER_COUNT:
        return None
    return f"{OPTION_TAG_PREFIX}{chr(ord('a') + option_index)}"
