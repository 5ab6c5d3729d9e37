"""Question Repository - Data Access Layer (SoC)"""
from typing import Dict, Iterable
from qbank.Exam.exam_central_db import get_collection
from qbank.Exam.Tag_Analytics.repositories.question.question_pipelines import build_populated_questions_pipeline
from qbank.Exam.Tag_Analytics.utils.security.security_utils import to_object_id

class QuestionRepo:
    def __init__(self):
        self.collection = get_collection("questions")

    def find_populated(self, question_ids: Iterable) -> Dict[str, Dict]:
        """Populated questions keyed by id string; unknown or malformed ids are absent"""
        object_ids = []
        for question_id in question_ids:
            oid = to_object_id(question_id)
            if oid is not None and oid not in object_ids:
                object_ids.append(oid)
        if not object_ids:
            return {}
        pipeline = build_populated_questions_pipeline(object_ids)
        return {str(q["_id"]): q for q in self.collection.aggregate(pipeline)}
