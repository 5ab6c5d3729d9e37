"""Insights Utilities - fail-rate categories for the last grouping dimension"""
from typing import Dict, List, Optional
from qbank.Exam.Tag_Analytics.config.settings import INSIGHT_THRESHOLDS
from qbank.Exam.Tag_Analytics.models.stat_tree import StatNode
from qbank.Exam.Tag_Analytics.utils.analysis.area_metrics import AreaRow, percent_of

def categorize_fail_pct(fail_pct: float) -> Dict[str, str]:
    for upper, category, action in INSIGHT_THRESHOLDS:
        if fail_pct < upper:
            return {"category": category, "action": action}
    _, category, action = INSIGHT_THRESHOLDS[-1]
    return {"category": category, "action": action}

def _insights_from_totals(totals: Dict[str, Dict[str, int]]) -> List[Dict]:
    insights = []
    for tag, agg in totals.items():
        fail_pct = percent_of(agg["fail"], agg["total"])
        insights.append({"tag": tag, "failPct": fail_pct, **categorize_fail_pct(fail_pct)})
    # Worst first
    insights.sort(key=lambda i: i["failPct"], reverse=True)
    return insights

def compute_insights_for_last_tag(root: StatNode, group_by: List[str]) -> List[Dict]:
    """Class insights aggregated by the value of the last requested dimension"""
    if not group_by:
        return []
    totals: Dict[str, Dict[str, int]] = {}
    for path, node in root.walk():
        if node.stats is None or not path:
            continue
        agg = totals.setdefault(path[-1], {"total": 0, "fail": 0})
        agg["total"] += node.stats.total
        agg["fail"] += node.stats.incorrect + node.stats.unattempted
    return _insights_from_totals(totals)

def compute_student_insights(rows: List[AreaRow], group_by: Optional[List[str]] = None) -> List[Dict]:
    """One student's insights aggregated by the last segment of each area"""
    if not group_by:
        return []
    totals: Dict[str, Dict[str, int]] = {}
    for row in rows:
        tag = row.path[-1] if row.path else row.area
        agg = totals.setdefault(tag, {"total": 0, "fail": 0})
        agg["total"] += row.total
        agg["fail"] += row.incorrect + row.unattempted
    return _insights_from_totals(totals)
