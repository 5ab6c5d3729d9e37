"""Sort Utilities - order sibling groups by a recursively summed metric"""
from typing import List, Tuple
from qbank.Exam.Tag_Analytics.config.settings import STAT_METRICS
from qbank.Exam.Tag_Analytics.models.stat_tree import StatNode

def get_stats_sum(node: StatNode, metric: str) -> int:
    """Metric value of a stat node, or the sum over its descendants"""
    if node is None:
        return 0
    if node.is_leaf:
        return node.stats.count(metric)
    return sum(get_stats_sum(child, metric) for child in node.children.values())

def sort_child_keys(node: StatNode, sort_key: str = "", direction: str = "desc") -> List[str]:
    """Child keys ordered by summed ``sort_key``; ties keep insertion order"""
    keys = list(node.children.keys())
    if not sort_key or sort_key not in STAT_METRICS:
        return keys
    return sorted(
        keys,
        key=lambda k: get_stats_sum(node.children[k], sort_key),
        reverse=direction == "desc",
    )

def sorted_children(node: StatNode, sort_key: str = "", direction: str = "desc") -> List[Tuple[str, StatNode]]:
    return [(key, node.children[key]) for key in sort_child_keys(node, sort_key, direction)]

def sort_stats_tree(node: StatNode, sort_key: str = "", direction: str = "desc") -> StatNode:
    """Reorder every level's children in place so serialized output follows the sort"""
    if sort_key in STAT_METRICS:
        node.children = dict(sorted_children(node, sort_key, direction))
    for child in node.children.values():
        sort_stats_tree(child, sort_key, direction)
    return node
