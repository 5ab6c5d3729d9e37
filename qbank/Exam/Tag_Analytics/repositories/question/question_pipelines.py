"""Question Domain Pipelines - Tag population queries (SoC)"""
from typing import List, Dict
from bson import ObjectId
from qbank.Exam.Tag_Analytics.config.settings import COLLECTIONS

# ═══════════════════════════════════════════════════════════════════════════════
# QUESTION POPULATION PIPELINES
# ═══════════════════════════════════════════════════════════════════════════════

def build_populated_questions_pipeline(question_ids: List[ObjectId]) -> List[Dict]:
    """Questions with tags populated to {_id, name, type: {_id, name}} in stored order"""
    return [
        {"$match": {"_id": {"$in": question_ids}}},
        {"$lookup": {
            "from": COLLECTIONS["tags"],
            "localField": "tags",
            "foreignField": "_id",
            "as": "tagDocs"
        }},
        {"$lookup": {
            "from": COLLECTIONS["tag_types"],
            "localField": "tagDocs.type",
            "foreignField": "_id",
            "as": "tagTypeDocs"
        }},
        # $lookup does not keep array order, so rebuild tags from the stored ids
        {"$addFields": {
            "tags": {"$map": {
                "input": {"$ifNull": ["$tags", []]},
                "as": "tagId",
                "in": {"$let": {
                    "vars": {"tag": {"$arrayElemAt": [
                        {"$filter": {"input": "$tagDocs", "cond": {"$eq": ["$$this._id", "$$tagId"]}}}, 0
                    ]}},
                    "in": {
                        "_id": "$$tagId",
                        "name": "$$tag.name",
                        "type": {"$arrayElemAt": [
                            {"$filter": {"input": "$tagTypeDocs", "cond": {"$eq": ["$$this._id", "$$tag.type"]}}}, 0
                        ]}
                    }
                }}
            }}
        }},
        {"$project": {
            "answerIndexes": 1,
            "options": 1,
            "tags._id": 1,
            "tags.name": 1,
            "tags.type._id": 1,
            "tags.type.name": 1
        }}
    ]
