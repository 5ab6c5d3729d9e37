"""Builders for paper, question and response documents used across tests"""
from typing import Dict, List, Optional


def make_tag(type_name: Optional[str], name: Optional[str]) -> Dict:
    tag = {"_id": f"tag-{type_name}-{name}", "name": name}
    if type_name is not None:
        tag["type"] = {"_id": f"type-{type_name}", "name": type_name}
    return tag


def make_question(qid: str, answer_indexes: List[int], tags: Optional[List[Dict]]) -> Dict:
    return {"_id": qid, "answerIndexes": answer_indexes, "tags": tags}


def make_section(name: str, questions: List) -> Dict:
    return {"name": name, "questions": [{"question": q} for q in questions]}


def make_response(name: str, roll: str, answers: Dict[str, Dict[str, List[int]]], rid: str = None) -> Dict:
    """``answers`` maps section name -> question id -> selected options"""
    return {
        "_id": rid or f"resp-{roll}",
        "student": {"_id": f"user-{roll}", "name": name, "rollNumber": roll},
        "sectionAnswers": [
            {
                "sectionName": section,
                "answers": [{"question": qid, "selectedOptions": selected} for qid, selected in by_question.items()],
            }
            for section, by_question in answers.items()
        ],
    }
