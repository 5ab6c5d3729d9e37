"""Group Key Utilities - resolve tree branch keys from question tags"""
from typing import Any, Dict, List, Optional
from qbank.Exam.Tag_Analytics.config.settings import SECTION_DIMENSION, COMPOSITE_TAG_DIMENSION

def question_tags(question: Dict) -> List[Dict]:
    tags = question.get("tags") if isinstance(question, dict) else None
    if not isinstance(tags, list):
        return []
    return [tag for tag in tags if isinstance(tag, dict)]

def tag_type_name(tag: Dict) -> Optional[str]:
    tag_type = tag.get("type")
    if isinstance(tag_type, dict):
        name = tag_type.get("name")
        return str(name) if name is not None else None
    return None

def unknown_placeholder(dimension: str) -> str:
    return f"Unknown {dimension[:1].upper()}{dimension[1:]}"

def get_tag_value(tags: List[Dict], dimension: str) -> str:
    """Name of the first tag whose type matches ``dimension`` (case-insensitive)"""
    wanted = dimension.lower()
    for tag in tags:
        type_name = tag_type_name(tag)
        if type_name is not None and type_name.lower() == wanted:
            name = tag.get("name")
            if name:
                return str(name)
            break
    return unknown_placeholder(dimension)

def composite_tag_key(tags: List[Dict]) -> str:
    """Every tag as "Type: Name", joined in stored order"""
    return ", ".join(
        f"{tag_type_name(tag) or 'Other'}: {tag.get('name') or 'Unknown'}"
        for tag in tags
    )

def resolve_group_key(question: Dict, dimension: str, section_name: Any) -> str:
    """Key to branch on at one tree level; never raises"""
    if dimension == SECTION_DIMENSION:
        return str(section_name) if section_name is not None else unknown_placeholder(SECTION_DIMENSION)
    tags = question_tags(question)
    if dimension == COMPOSITE_TAG_DIMENSION:
        return composite_tag_key(tags)
    return get_tag_value(tags, str(dimension))

def build_group_fields(paper_sections: List[Dict]) -> List[Dict[str, str]]:
    """Grouping choices: section first, then each observed tag type in first-seen order"""
    fields = [{"value": SECTION_DIMENSION, "label": "Section"}]
    seen = set()
    for section in paper_sections or []:
        if not isinstance(section, dict):
            continue
        for q_wrap in section.get("questions") or []:
            question = q_wrap.get("question") if isinstance(q_wrap, dict) else None
            for tag in question_tags(question):
                type_name = tag_type_name(tag)
                if type_name and type_name not in seen:
                    seen.add(type_name)
                    fields.append({"value": type_name.lower(), "label": type_name})
    return fields

def group_labels(group_by: List[str], group_fields: Optional[List[Dict[str, str]]] = None) -> List[str]:
    """Human-readable header for each requested dimension"""
    lookup = {f.get("value"): f.get("label") for f in group_fields or [] if isinstance(f, dict)}
    return [lookup.get(dimension) or dimension for dimension in group_by]
