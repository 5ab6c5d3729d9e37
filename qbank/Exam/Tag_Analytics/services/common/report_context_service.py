"""Report Context Service - loads papers and responses for the analytics engine"""
from typing import Dict, List, Tuple
from qbank.Exam.Tag_Analytics.config.log_config import get_logger
from qbank.Exam.Tag_Analytics.exceptions.exceptions import PaperNotFoundError, ResponseNotFoundError
from qbank.Exam.Tag_Analytics.repositories.core.repository_factory import RepositoryFactory
from qbank.Exam.Tag_Analytics.utils.formatting.json_utils import document_id

logger = get_logger("report_context_service")

class ReportContextLoader:
    def __init__(self):
        self.repo_factory = RepositoryFactory()

    def populate_sections(self, sections: List[Dict]) -> List[Dict]:
        """Swap question ids in ``sections`` for populated question documents.

        Already-populated entries are kept as they are; ids with no matching
        question stay bare so the engine skips them.
        """
        pending = []
        for section in sections or []:
            for q_wrap in (section or {}).get("questions") or []:
                if isinstance(q_wrap, dict) and not isinstance(q_wrap.get("question"), dict):
                    pending.append(q_wrap.get("question"))
        if not pending:
            return sections or []

        populated = self.repo_factory.get_question_repo().find_populated(pending)
        for section in sections:
            for q_wrap in (section or {}).get("questions") or []:
                if isinstance(q_wrap, dict) and not isinstance(q_wrap.get("question"), dict):
                    question = populated.get(document_id(q_wrap.get("question")))
                    if question is not None:
                        q_wrap["question"] = question

        missing = len(pending) - sum(1 for qid in pending if document_id(qid) in populated)
        if missing:
            logger.warning(f"{missing} paper question reference(s) could not be populated")
        return sections

    def load_paper(self, paper_id) -> Dict:
        """Paper with populated sections or PaperNotFoundError"""
        paper = self.repo_factory.get_paper_repo().find_by_id(paper_id)
        if not paper:
            raise PaperNotFoundError()
        paper["sections"] = self.populate_sections(paper.get("sections") or [])
        return paper

    def load_class_context(self, paper_id) -> Tuple[Dict, List[Dict]]:
        """Paper plus every response submitted against it"""
        paper = self.load_paper(paper_id)
        responses = self.repo_factory.get_response_repo().find_by_paper(paper["_id"])
        logger.info(f"Loaded paper {paper_id} with {len(responses)} responses")
        return paper, responses

    def load_response_context(self, response_id, class_level: bool = False) -> Tuple[Dict, Dict, List[Dict]]:
        """(paper, response, responses) for one response.

        ``responses`` is the whole class in class-level mode and just the
        response itself otherwise.
        """
        response_repo = self.repo_factory.get_response_repo()
        response = response_repo.find_by_id(response_id)
        if not response:
            raise ResponseNotFoundError()
        paper = self.load_paper(response.get("paper"))
        responses = response_repo.find_by_paper(paper["_id"]) if class_level else [response]
        return paper, response, responses
