"""Tag Report Service - Business Logic Layer (SoC)"""
import json
from typing import Dict, List, Optional, Tuple
from flask import Response
from qbank.Exam.Tag_Analytics.config.log_config import get_logger
from qbank.Exam.Tag_Analytics.config.settings import SECTION_DIMENSION, ExportConfig
from qbank.Exam.Tag_Analytics.models.stat_tree import StatNode, StudentRef
from qbank.Exam.Tag_Analytics.services.common.report_context_service import ReportContextLoader
from qbank.Exam.Tag_Analytics.services.report.excel_export_service import ExcelExportService
from qbank.Exam.Tag_Analytics.utils.analysis import (
    build_question_stats, build_tag_report, dedupe_stats_tree, compact_stats_tree,
    sort_stats_tree, build_group_fields, flatten_for_export, compute_insights_for_last_tag,
    unique_students,
)
from qbank.Exam.Tag_Analytics.utils.formatting.json_utils import sanitize_mongo_document, document_id

logger = get_logger("tag_report_service")

def build_report_tree(
    responses: List[Dict],
    sections: List[Dict],
    group_by: List[str],
    class_level: bool = False,
    compact: bool = False,
) -> StatNode:
    """build -> dedup -> optional compact, always in that order"""
    question_stats = build_question_stats(responses, sections) if class_level else None
    root = build_tag_report(responses, sections, group_by, is_class_level=class_level, question_stats=question_stats)
    dedupe_stats_tree(root)
    if compact:
        compact_stats_tree(root)
    return root

def class_students(responses: List[Dict]) -> List[StudentRef]:
    return unique_students([StudentRef.from_document(r.get("student")) for r in responses])

def paper_summary(paper: Dict) -> Dict:
    return {"id": document_id(paper), "title": paper.get("title", "")}

def stats_size(stats: Dict) -> int:
    return len(json.dumps(stats, default=str).encode("utf-8"))

class TagReportService:
    def __init__(self):
        self.context_loader = ReportContextLoader()

    def get_class_report(self, paper_id: str, group_by: List[str], compact: bool = False,
                         sort_key: str = "", sort_order: str = "desc") -> Tuple[Dict, int]:
        """Class-level tree for every response to a paper; returns (payload, stats bytes)"""
        paper, responses = self.context_loader.load_class_context(paper_id)
        root = build_report_tree(responses, paper["sections"], group_by, class_level=True, compact=compact)
        sort_stats_tree(root, sort_key, sort_order)

        stats = root.to_dict()
        size = stats_size(stats)
        logger.info(f"Class report for paper {paper_id}: {len(responses)} responses, groupBy={group_by}, {size} bytes")
        return sanitize_mongo_document({
            "success": True,
            "paper": paper_summary(paper),
            "groupBy": group_by,
            "stats": stats,
            "students": [s.to_dict() for s in class_students(responses)],
        }), size

    def get_student_report(self, response_id: str, group_by: List[str], class_level: bool = False,
                           compact: bool = False, sort_key: str = "", sort_order: str = "desc") -> Tuple[Dict, int]:
        """One student's tree, or the class tree of the student's paper in class-level mode"""
        paper, response, responses = self.context_loader.load_response_context(response_id, class_level)
        root = build_report_tree(responses, paper["sections"], group_by, class_level=class_level, compact=compact)
        sort_stats_tree(root, sort_key, sort_order)

        stats = root.to_dict()
        size = stats_size(stats)
        payload = {
            "success": True,
            "paper": paper_summary(paper),
            "groupBy": group_by,
            "stats": stats,
        }
        if class_level:
            payload["students"] = [s.to_dict() for s in class_students(responses)]
        else:
            student = StudentRef.from_document(response.get("student"))
            payload["student"] = student.name
            payload["rollNumber"] = student.roll_number
        logger.info(f"Student report for response {response_id}: classLevel={class_level}, groupBy={group_by}, {size} bytes")
        return sanitize_mongo_document(payload), size

    def get_class_group_fields(self, paper_id: str) -> Dict:
        paper = self.context_loader.load_paper(paper_id)
        return {"success": True, "fields": build_group_fields(paper["sections"])}

    def get_student_group_fields(self, response_id: str) -> Dict:
        """Grouping choices for a response's paper; never fails"""
        try:
            paper, _, _ = self.context_loader.load_response_context(response_id)
            fields = build_group_fields(paper["sections"])
        except Exception as e:
            logger.warning(f"Falling back to section-only group fields for response {response_id}: {e}")
            fields = [{"value": SECTION_DIMENSION, "label": "Section"}]
        return {"success": True, "fields": fields}

    def export_class_report_excel(self, paper_id: str, group_by: List[str],
                                  sort_key: str = "", sort_order: str = "desc") -> Response:
        paper, responses = self.context_loader.load_class_context(paper_id)
        root = build_report_tree(responses, paper["sections"], group_by, class_level=True)
        return self._export(root, paper, group_by, sort_key, sort_order, "class")

    def export_student_report_excel(self, response_id: str, group_by: List[str], class_level: bool = False,
                                    sort_key: str = "", sort_order: str = "desc") -> Response:
        paper, response, responses = self.context_loader.load_response_context(response_id, class_level)
        root = build_report_tree(responses, paper["sections"], group_by, class_level=class_level)
        single_student: Optional[StudentRef] = None
        if not class_level:
            single_student = StudentRef.from_document(response.get("student"))
        return self._export(root, paper, group_by, sort_key, sort_order, "student", single_student)

    def _export(self, root: StatNode, paper: Dict, group_by: List[str], sort_key: str, sort_order: str,
                scope: str, single_student: Optional[StudentRef] = None) -> Response:
        tables = flatten_for_export(
            root, group_by, build_group_fields(paper["sections"]), sort_key, sort_order, single_student
        )
        insights = compute_insights_for_last_tag(root, group_by)
        filename = f"{ExportConfig.DEFAULT_FILENAME}_{scope}_{paper.get('title') or document_id(paper)}"
        logger.info(f"Exporting {scope} report: {len(tables.consolidated)} groups, {len(tables.students)} students")
        return ExcelExportService.export_tag_report_to_excel(tables, insights, filename)
