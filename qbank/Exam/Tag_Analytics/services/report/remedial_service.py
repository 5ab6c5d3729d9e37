"""Remedial Service - per-student weak-area rows and insights"""
from typing import Dict, List
from qbank.Exam.Tag_Analytics.config.log_config import get_logger
from qbank.Exam.Tag_Analytics.models.stat_tree import StudentRef
from qbank.Exam.Tag_Analytics.services.common.report_context_service import ReportContextLoader
from qbank.Exam.Tag_Analytics.services.report.tag_report_service import build_report_tree, paper_summary
from qbank.Exam.Tag_Analytics.utils.analysis import (
    build_group_fields, build_student_area_metrics, compute_insights_for_last_tag, compute_student_insights,
)
from qbank.Exam.Tag_Analytics.utils.formatting.json_utils import sanitize_mongo_document

logger = get_logger("remedial_service")

class RemedialService:
    def __init__(self):
        self.context_loader = ReportContextLoader()

    def get_class_remedials(self, paper_id: str, group_by: List[str],
                            sort_key: str = "", sort_order: str = "desc") -> Dict:
        """Area rows for every student of a paper plus class-wide insights"""
        paper, responses = self.context_loader.load_class_context(paper_id)
        root = build_report_tree(responses, paper["sections"], group_by, class_level=True)
        metrics = build_student_area_metrics(
            root, group_by, build_group_fields(paper["sections"]), sort_key, sort_order
        )
        students = []
        for entry in metrics.values():
            data = entry.to_dict()
            data["insights"] = compute_student_insights(entry.rows, group_by)
            students.append(data)

        logger.info(f"Remedials for paper {paper_id}: {len(students)} students, groupBy={group_by}")
        return sanitize_mongo_document({
            "success": True,
            "paper": paper_summary(paper),
            "groupBy": group_by,
            "students": students,
            "insights": compute_insights_for_last_tag(root, group_by),
        })

    def get_student_remedials(self, response_id: str, group_by: List[str],
                              sort_key: str = "", sort_order: str = "desc") -> Dict:
        """Area rows for one response, credited from its own compact tree"""
        paper, response, responses = self.context_loader.load_response_context(response_id)
        student = StudentRef.from_document(response.get("student"))
        root = build_report_tree(responses, paper["sections"], group_by, compact=True)
        metrics = build_student_area_metrics(
            root, group_by, build_group_fields(paper["sections"]), sort_key, sort_order, single_student=student
        )
        entry = metrics.get(student.key)
        rows = entry.rows if entry else []

        logger.info(f"Remedials for response {response_id}: {len(rows)} areas, groupBy={group_by}")
        return sanitize_mongo_document({
            "success": True,
            "paper": paper_summary(paper),
            "groupBy": group_by,
            "student": student.to_dict(),
            "rows": [row.to_dict() for row in rows],
            "insights": compute_student_insights(rows, group_by),
        })
