"""Response Repository - Data Access Layer (SoC)"""
from typing import Dict, List, Optional
from qbank.Exam.exam_central_db import get_collection
from qbank.Exam.Tag_Analytics.repositories.response.response_pipelines import build_responses_with_student_pipeline
from qbank.Exam.Tag_Analytics.utils.security.security_utils import to_object_id

class ResponseRepo:
    def __init__(self):
        self.collection = get_collection("responses")

    def find_by_id(self, response_id) -> Optional[Dict]:
        oid = to_object_id(response_id)
        if oid is None:
            return None
        results = list(self.collection.aggregate(build_responses_with_student_pipeline({"_id": oid})))
        return results[0] if results else None

    def find_by_paper(self, paper_id) -> List[Dict]:
        oid = to_object_id(paper_id)
        if oid is None:
            return []
        return list(self.collection.aggregate(build_responses_with_student_pipeline({"paper": oid})))
