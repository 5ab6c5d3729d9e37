"""Paper Repository - Data Access Layer (SoC)"""
from typing import Dict, Optional
from qbank.Exam.exam_central_db import get_collection
from qbank.Exam.Tag_Analytics.utils.security.security_utils import to_object_id

class PaperRepo:
    def __init__(self):
        self.collection = get_collection("papers")

    def find_by_id(self, paper_id) -> Optional[Dict]:
        oid = to_object_id(paper_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid}, {"title": 1, "sections": 1})
