"""Dedup Utilities - post-build cleanup of the stat tree (mutates in place)"""
from typing import Any, Dict, List
from qbank.Exam.Tag_Analytics.models.stat_tree import (
    StatNode, LeafStats, QuestionRef, StudentRef, STATUSES
)

def _dedupe_question_refs(refs: List[Any]) -> List[Any]:
    """First occurrence wins; objects compare by question id, primitives by value"""
    seen = set()
    unique = []
    for ref in refs:
        key = ("id", ref.id) if isinstance(ref, QuestionRef) else ("value", ref)
        if key in seen:
            continue
        seen.add(key)
        unique.append(ref)
    return unique

def _dedupe_option_tags(option_tags: List) -> List:
    seen = set()
    unique = []
    for record in option_tags:
        if record.dedup_key in seen:
            continue
        seen.add(record.dedup_key)
        unique.append(record)
    return unique

def dedupe_leaf_stats(stats: LeafStats) -> None:
    for status in STATUSES:
        refs = stats.question_refs(status)
        refs[:] = _dedupe_question_refs(refs)
    stats.option_tags[:] = _dedupe_option_tags(stats.option_tags)

def dedupe_stats_tree(node: StatNode) -> StatNode:
    """Recursively de-duplicate provenance arrays on every stat node.

    Leaf stats are cleaned and the walk still continues into any children
    beneath them. Running it twice changes nothing further.
    """
    if node.is_leaf:
        dedupe_leaf_stats(node.stats)
    for child in node.children.values():
        dedupe_stats_tree(child)
    return node

def unique_students(students: List[StudentRef]) -> List[StudentRef]:
    """De-duplicate by rollNumber|name keeping first-seen order"""
    unique: Dict[str, StudentRef] = {}
    for student in students:
        unique.setdefault(student.key, student)
    return list(unique.values())

def compact_stats_tree(node: StatNode) -> StatNode:
    """Aggregate students at node level and prune per-question student lists"""
    stats = node.stats
    if stats is not None:
        for status in STATUSES:
            refs = stats.question_refs(status)
            collected: List[StudentRef] = []
            for ref in refs:
                if isinstance(ref, QuestionRef) and ref.outcome is not None:
                    collected.extend(ref.outcome.students_for(status))
            students = unique_students(collected)
            if students:
                setattr(stats, f"{status}_students", students)
            refs[:] = [ref.pruned() if isinstance(ref, QuestionRef) else ref for ref in refs]
    for child in node.children.values():
        compact_stats_tree(child)
    return node
