"""Response Domain Pipelines - Student lookup queries (SoC)"""
from typing import List, Dict
from qbank.Exam.Tag_Analytics.config.settings import COLLECTIONS

# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSE FETCH PIPELINES
# ═══════════════════════════════════════════════════════════════════════════════

def build_responses_with_student_pipeline(match: Dict) -> List[Dict]:
    """Responses matching ``match`` with student populated to {_id, name, rollNumber}"""
    return [
        {"$match": match},
        {"$lookup": {
            "from": COLLECTIONS["users"],
            "let": {"studentId": "$student"},
            "pipeline": [
                {"$match": {"$expr": {"$eq": ["$_id", "$$studentId"]}}},
                {"$project": {"name": 1, "rollNumber": 1}}
            ],
            "as": "student"
        }},
        {"$addFields": {"student": {"$arrayElemAt": ["$student", 0]}}},
        {"$sort": {"_id": 1}}
    ]
