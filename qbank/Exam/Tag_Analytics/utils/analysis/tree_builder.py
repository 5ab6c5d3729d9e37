"""Tag Report Tree Builder - DRY Implementation for grouped correctness statistics"""
from typing import Dict, Iterator, List, Optional, Tuple
from qbank.Exam.Tag_Analytics.config.log_config import get_logger
from qbank.Exam.Tag_Analytics.models.stat_tree import (
    StatNode, LeafStats, QuestionRef, QuestionOutcome, OptionTagRecord, StudentRef
)
from qbank.Exam.Tag_Analytics.utils.formatting.json_utils import document_id
from qbank.Exam.Tag_Analytics.utils.analysis.answer_utils import (
    build_answer_map, evaluate_answer, selected_options, option_tag_type, UNATTEMPTED
)
from qbank.Exam.Tag_Analytics.utils.analysis.group_key_utils import (
    resolve_group_key, question_tags, tag_type_name
)

logger = get_logger("tree_builder")

def iter_paper_questions(paper_sections: List[Dict]) -> Iterator[Tuple[str, int, Dict]]:
    """Yield (section name, question number, question) in paper order.

    Questions without tags or an id are skipped and do not consume a number;
    numbering restarts at 1 in every section.
    """
    for paper_section in paper_sections or []:
        if not isinstance(paper_section, dict):
            continue
        section_name = paper_section.get("name")
        question_number = 1
        for q_wrap in paper_section.get("questions") or []:
            question = q_wrap.get("question") if isinstance(q_wrap, dict) else None
            if not isinstance(question, dict) or question.get("tags") is None or not document_id(question):
                logger.debug(f"Skipping malformed question in section {section_name}")
                continue
            yield section_name, question_number, question
            question_number += 1

def build_question_stats(responses: List[Dict], paper_sections: List[Dict]) -> Dict[str, QuestionOutcome]:
    """Class-level outcome per question id across all responses"""
    question_stats: Dict[str, QuestionOutcome] = {}

    for response in responses or []:
        if not isinstance(response, dict):
            continue
        student = StudentRef.from_document(response.get("student"))
        answer_map = build_answer_map(response)

        for section_name, _, question in iter_paper_questions(paper_sections):
            qid = document_id(question)
            answer = answer_map.get(section_name, {}).get(qid)
            status = evaluate_answer(answer, question.get("answerIndexes") or [])
            question_stats.setdefault(qid, QuestionOutcome()).record(status, student)

    return question_stats

def _descend(root: StatNode, question: Dict, group_by: List[str], section_name) -> StatNode:
    """Walk/create one nested level per dimension; the final level carries stats"""
    pointer = root
    last = len(group_by) - 1
    for depth, dimension in enumerate(group_by):
        key = resolve_group_key(question, dimension, section_name)
        pointer = pointer.child(key, leaf=depth == last)
    return pointer

def _append_option_tags(stats: LeafStats, question: Dict, selected: List, student: Optional[StudentRef]) -> None:
    tags = question_tags(question)
    answer_indexes = question.get("answerIndexes")
    if not isinstance(answer_indexes, list):
        answer_indexes = []
    for option_index in selected:
        option_type = option_tag_type(option_index)
        if option_type is None:
            continue
        is_correct = option_index in answer_indexes
        for tag in tags:
            type_name = tag_type_name(tag)
            if type_name is None or type_name.lower() != option_type:
                continue
            stats.option_tags.append(OptionTagRecord(
                option=option_type,
                tag=tag.get("name"),
                is_correct=is_correct,
                student=student,
            ))

def build_tag_report(
    responses: List[Dict],
    paper_sections: List[Dict],
    group_by: List[str],
    is_class_level: bool = False,
    question_stats: Optional[Dict[str, QuestionOutcome]] = None,
) -> StatNode:
    """Build the group-by tree of correctness statistics.

    Every response x every in-scope question lands in exactly one stat node,
    found by resolving ``group_by`` dimensions in order. With no dimensions the
    root itself is the stat node and carries the grand totals.
    """
    question_stats = question_stats or {}
    group_by = list(group_by or [])
    root = StatNode(stats=LeafStats() if not group_by else None)
    events = 0

    for response in responses or []:
        if not isinstance(response, dict):
            continue
        answer_map = build_answer_map(response)
        student = None
        if is_class_level and isinstance(response.get("student"), dict):
            student = StudentRef.from_document(response["student"])

        for section_name, question_number, question in iter_paper_questions(paper_sections):
            qid = document_id(question)
            answer = answer_map.get(section_name, {}).get(qid)
            status = evaluate_answer(answer, question.get("answerIndexes") or [])

            question_ref = QuestionRef(
                id=qid,
                number=question_number,
                section=section_name,
                outcome=question_stats.get(qid) if is_class_level else None,
            )

            node = _descend(root, question, group_by, section_name)
            stats = node.stats
            stats.record(status, question_ref)

            if status != UNATTEMPTED:
                _append_option_tags(stats, question, selected_options(answer), student)

            stats.tags = [
                {"type": tag_type_name(tag) or "Unknown", "value": tag.get("name")}
                for tag in question_tags(question)
            ]
            events += 1

    logger.debug(f"Built tag report: {events} events, {len(group_by)} dimensions, class_level={is_class_level}")
    return root
